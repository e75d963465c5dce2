class CapacityDataError(Exception):
    """Base error for anything the dashboard can recover from by uploading a new file."""


class StructuralParseError(CapacityDataError):
    """The uploaded text could not be tokenized into rows and columns."""


class RejectedFileTypeError(CapacityDataError):
    """The uploaded file is not a CSV file."""


class EmptyDatasetError(CapacityDataError):
    """No dated records are available to build a view from."""
