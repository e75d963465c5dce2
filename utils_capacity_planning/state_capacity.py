# utils_capacity_planning/state_capacity.py

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime as _dt
from typing import List, Optional, Sequence, Tuple

from utils_capacity_planning.aggregation_capacity import (
    DailyAggregate,
    DailyInputCount,
    MonthlyAggregate,
    SummaryMetrics,
    daily_input_counts,
    daily_resource_averages,
    monthly_statistics,
    summary_metrics,
)
from utils_capacity_planning.errors_capacity import EmptyDatasetError
from utils_capacity_planning.grouping_capacity import DateGroup, count_dateless, group_by_date
from utils_capacity_planning.maintenance_capacity import MaintenanceAlert, maintenance_alerts
from utils_capacity_planning.records_capacity import ResourceSample, RowRecord, samples_from_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    dataset_id: str
    name: str
    records: Tuple[ResourceSample, ...]
    loaded_at: str
    columns: Tuple[str, ...] = ()
    source_id: Optional[str] = None  # uploader file id the records came from


@dataclass(frozen=True)
class DerivedViews:
    groups: DateGroup
    daily: List[DailyAggregate]
    counts: List[DailyInputCount]
    monthly: List[MonthlyAggregate]
    summary: SummaryMetrics
    alerts: List[MaintenanceAlert]
    dateless: int

    @property
    def is_empty(self) -> bool:
        return not self.groups


def derive_views(records: Sequence[ResourceSample]) -> DerivedViews:
    groups = group_by_date(records)
    return DerivedViews(
        groups=groups,
        daily=daily_resource_averages(groups),
        counts=daily_input_counts(groups),
        monthly=monthly_statistics(groups),
        summary=summary_metrics(records),
        alerts=maintenance_alerts(groups),
        dateless=count_dateless(records),
    )


def require_records(records: Sequence[ResourceSample]) -> Sequence[ResourceSample]:
    if not any(r.date for r in records):
        raise EmptyDatasetError("No dated records to report on. Upload a CSV with a date column.")
    return records


@dataclass
class DashboardState:
    """What one browser session is looking at.

    A load swaps the whole dataset in one assignment; derived views are
    memoized per dataset id and dropped with it.
    """

    dataset: Optional[Dataset] = None
    selected_date: Optional[str] = None
    _views_for: Optional[str] = field(default=None, repr=False)
    _views: Optional[DerivedViews] = field(default=None, repr=False)

    @property
    def has_data(self) -> bool:
        return self.dataset is not None and bool(self.dataset.records)

    @property
    def loaded_without_rows(self) -> bool:
        """A file was accepted but held only a header."""
        return self.dataset is not None and not self.dataset.records

    @property
    def records(self) -> Tuple[ResourceSample, ...]:
        return self.dataset.records if self.dataset else ()

    def load(
        self,
        name: str,
        rows: Sequence[RowRecord],
        columns: Sequence[str] = (),
        source_id: Optional[str] = None,
    ) -> Dataset:
        dataset = Dataset(
            dataset_id=str(uuid.uuid4())[:8],
            name=name,
            records=tuple(samples_from_rows(rows)),
            loaded_at=_dt.now().isoformat(timespec="seconds"),
            columns=tuple(columns),
            source_id=source_id,
        )
        self.dataset = dataset
        self.selected_date = None
        self._views_for = None
        self._views = None
        logger.info("Loaded dataset %s (%s): %d records", dataset.dataset_id, name, len(dataset.records))
        return dataset

    def clear(self):
        self.dataset = None
        self.selected_date = None
        self._views_for = None
        self._views = None

    def select_date(self, key: Optional[str]):
        self.selected_date = key or None

    def views(self) -> DerivedViews:
        dataset_id = self.dataset.dataset_id if self.dataset else None
        if self._views is None or self._views_for != dataset_id:
            self._views = derive_views(self.records)
            self._views_for = dataset_id
        return self._views
