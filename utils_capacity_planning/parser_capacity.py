# utils_capacity_planning/parser_capacity.py

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from utils_capacity_planning.errors_capacity import RejectedFileTypeError, StructuralParseError
from utils_capacity_planning.records_capacity import RowRecord
from utils_capacity_planning.settings_capacity import ACCEPTED_CONTENT_TYPES, ACCEPTED_EXTENSIONS

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    records: List[RowRecord] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self):
        if self.error is not None:
            raise StructuralParseError(self.error)


def normalize_column(name) -> str:
    return str(name).strip().lower().replace(" ", "_")


def dedupe_columns(columns: List[str]) -> List[str]:
    """Suffix repeated header names: cpu_usage, cpu_usage -> cpu_usage, cpu_usage_1."""
    seen = {}
    taken = set(columns)
    out = []
    for name in columns:
        if name not in seen:
            seen[name] = 0
            out.append(name)
            continue
        n = seen[name] + 1
        while f"{name}_{n}" in taken:
            n += 1
        seen[name] = n
        renamed = f"{name}_{n}"
        taken.add(renamed)
        out.append(renamed)
    if out != columns:
        logger.warning("Duplicate column names renamed: %s -> %s", columns, out)
    return out


def parse_capacity_csv(text: str) -> ParseResult:
    """Parse CSV text into raw string records.

    The first line names the columns; blank lines are skipped. A row that
    cannot be tokenized fails the whole input: no records are returned and
    ``error`` carries the reason.
    """
    # header=None: the header line fixes the field count, so a longer row is a
    # tokenizing error instead of being read as an implicit index
    try:
        raw = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return ParseResult()
    except (pd.errors.ParserError, ValueError) as e:
        logger.warning("CSV parsing failed: %s", e)
        return ParseResult(error=f"CSV parsing error: {e}")

    if raw.empty:
        return ParseResult()

    columns = dedupe_columns([
        normalize_column(c) if isinstance(c, str) and c.strip() else f"unnamed_{i}"
        for i, c in enumerate(raw.iloc[0].tolist())
    ])

    records: List[RowRecord] = []
    for row in raw.iloc[1:].itertuples(index=False, name=None):
        # short rows come back padded with NaN; those fields are absent
        records.append({col: val for col, val in zip(columns, row) if isinstance(val, str)})

    return ParseResult(records=records, columns=columns)


def check_upload_type(file_name: str, content_type: Optional[str] = None):
    name = (file_name or "").lower()
    if name.endswith(ACCEPTED_EXTENSIONS):
        return
    if content_type and content_type.split(";")[0].strip().lower() in ACCEPTED_CONTENT_TYPES:
        return
    logger.info("Rejected upload %r (content type %r)", file_name, content_type)
    raise RejectedFileTypeError("Please upload a valid CSV file")


def read_uploaded_csv(file_name: str, content_type: Optional[str], data: bytes) -> ParseResult:
    """Type-check, decode and parse one uploaded file. Raises on any failure."""
    check_upload_type(file_name, content_type)
    text = data.decode("utf-8-sig", errors="ignore")
    result = parse_capacity_csv(text)
    result.raise_for_error()
    logger.info("Parsed %s: %d rows, columns=%s", file_name, len(result.records), result.columns)
    return result
