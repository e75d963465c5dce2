# utils_capacity_planning/maintenance_capacity.py

"""
Rule-based maintenance scheduling.

For every distinct date (ascending, zero-based index i), in this order:
  1) more than 800 rows         -> storage reclaim, +3 days, medium, pending
  2) i % 7 == 0                 -> weekly backup,   +7 days, medium, scheduled
  3) mean CPU above 70 %        -> index rebuild,   +1 day,  high,   pending

All alerts are pooled, stable-sorted by scheduled date and cut to the first 10.
This is a fixed heuristic, not a forecast.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import List

import pandas as pd

from utils_capacity_planning.aggregation_capacity import mean_of
from utils_capacity_planning.grouping_capacity import DateGroup, parse_calendar_date, sorted_dates
from utils_capacity_planning.settings_capacity import (
    BACKUP_EVERY_N_DATES,
    BACKUP_OFFSET_DAYS,
    INDEX_REBUILD_MIN_CPU,
    INDEX_REBUILD_OFFSET_DAYS,
    MAX_ALERTS,
    STORAGE_RECLAIM_MIN_ROWS,
    STORAGE_RECLAIM_OFFSET_DAYS,
)

logger = logging.getLogger(__name__)

STORAGE_RECLAIM = "storage_reclaim"
BACKUP = "backup"
INDEX_REBUILD = "index_rebuild"


@dataclass(frozen=True)
class MaintenanceAlert:
    alert_id: str
    kind: str
    title: str
    description: str
    severity: str
    scheduled_date: datetime.date
    estimated_duration: str
    status: str
    source_date: str


def _alert(kind, source_date, day, offset, title, description, severity, duration, status):
    return MaintenanceAlert(
        alert_id=f"{kind}-{source_date}",
        kind=kind,
        title=title,
        description=description,
        severity=severity,
        scheduled_date=day + datetime.timedelta(days=offset),
        estimated_duration=duration,
        status=status,
        source_date=source_date,
    )


def maintenance_alerts(groups: DateGroup, limit: int = MAX_ALERTS) -> List[MaintenanceAlert]:
    alerts: List[MaintenanceAlert] = []

    for index, date in enumerate(sorted_dates(groups)):
        day = parse_calendar_date(date)
        if day is None:
            logger.warning("Date %r is not a calendar date; no alerts scheduled from it", date)
            continue
        rows = groups[date]

        if len(rows) > STORAGE_RECLAIM_MIN_ROWS:
            alerts.append(_alert(
                STORAGE_RECLAIM, date, day, STORAGE_RECLAIM_OFFSET_DAYS,
                "Storage Reclaim Required",
                "Vacuum/compaction needed to reclaim storage space and refresh statistics",
                "medium", "2-4 hours", "pending",
            ))

        if index % BACKUP_EVERY_N_DATES == 0:
            alerts.append(_alert(
                BACKUP, date, day, BACKUP_OFFSET_DAYS,
                "Scheduled Backup",
                "Weekly full database backup",
                "medium", "1-3 hours", "scheduled",
            ))

        if mean_of(rows, "cpu_usage") > INDEX_REBUILD_MIN_CPU:
            alerts.append(_alert(
                INDEX_REBUILD, date, day, INDEX_REBUILD_OFFSET_DAYS,
                "Index Optimization",
                "High CPU usage detected - index rebuilding recommended",
                "high", "30-60 minutes", "pending",
            ))

    alerts.sort(key=lambda a: a.scheduled_date)
    return alerts[:limit]


def alerts_frame(alerts: List[MaintenanceAlert]) -> pd.DataFrame:
    cols = ["Scheduled", "Task", "Severity", "Duration", "Status", "Triggered By", "Description"]
    rows = [
        {
            "Scheduled": a.scheduled_date.isoformat(),
            "Task": a.title,
            "Severity": a.severity.upper(),
            "Duration": a.estimated_duration,
            "Status": a.status,
            "Triggered By": a.source_date,
            "Description": a.description,
        }
        for a in alerts
    ]
    return pd.DataFrame(rows, columns=cols)
