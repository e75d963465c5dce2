# utils_capacity_planning/grouping_capacity.py

import datetime
import logging
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from utils_capacity_planning.records_capacity import ResourceSample

logger = logging.getLogger(__name__)

DateGroup = Dict[str, List[ResourceSample]]


def _sample_date(sample: ResourceSample) -> Optional[str]:
    return sample.date


def group_by_date(
    records: Sequence[ResourceSample],
    date_of: Callable[[ResourceSample], Optional[str]] = _sample_date,
) -> DateGroup:
    """Bucket records by date key.

    Keys keep the order of their first occurrence; callers sort when they need
    chronological output. Records without a date are left out.
    """
    groups: DateGroup = {}
    skipped = 0
    for record in records:
        key = date_of(record)
        if not key:
            skipped += 1
            continue
        groups.setdefault(key, []).append(record)
    if skipped:
        logger.info("Skipped %d record(s) without a date", skipped)
    return groups


def count_dateless(
    records: Sequence[ResourceSample],
    date_of: Callable[[ResourceSample], Optional[str]] = _sample_date,
) -> int:
    return sum(1 for record in records if not date_of(record))


def flatten(groups: DateGroup) -> List[ResourceSample]:
    return [record for rows in groups.values() for record in rows]


def sorted_dates(groups: DateGroup) -> List[str]:
    # lexical order; correct for zero-padded ISO dates
    return sorted(groups)


def parse_calendar_date(date_key: str) -> Optional[datetime.date]:
    """Interpret a date key as a calendar day, or None when it is not one."""
    ts = pd.to_datetime(date_key, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()
