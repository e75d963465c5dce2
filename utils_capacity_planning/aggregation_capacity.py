# utils_capacity_planning/aggregation_capacity.py

"""
Per-day, per-month and whole-dataset summaries of resource samples.

Every function takes its input explicitly and returns a fresh value:
    groups  = group_by_date(samples)
    daily   = daily_resource_averages(groups)
    monthly = monthly_statistics(groups)
    summary = summary_metrics(samples)

Absent or non-numeric metric values count as 0; rows are never skipped for it.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from utils_capacity_planning.grouping_capacity import DateGroup, parse_calendar_date, sorted_dates
from utils_capacity_planning.records_capacity import ResourceSample, round_half_up
from utils_capacity_planning.settings_capacity import NETWORK_DIVISOR, POWER_DIVISOR, TREND_WINDOW_DAYS

logger = logging.getLogger(__name__)

# metric column -> (aggregate attribute, divisor into display units)
DISPLAY_METRICS = {
    "cpu_usage": ("cpu", 1),
    "memory_usage": ("memory", 1),
    "network_traffic": ("network", NETWORK_DIVISOR),
    "power_consumption": ("power", POWER_DIVISOR),
}


# =========================
#   Data Structures
# =========================

@dataclass(frozen=True)
class DailyAggregate:
    date: str
    input_count: int
    cpu: float      # %
    memory: float   # %
    network: float  # MB/s
    power: float    # KW


@dataclass(frozen=True)
class DailyInputCount:
    date: str
    inputs: int


@dataclass(frozen=True)
class MonthlyAggregate:
    year: int
    month: int
    cpu: float
    memory: float
    network: float
    power: float
    days: int
    total_inputs: int

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class SummaryMetrics:
    total_records: int
    daily_inputs: float
    avg_cpu: float
    avg_memory: float
    avg_network: float  # bytes/s
    avg_power: float    # W
    start_date: str
    end_date: str


@dataclass(frozen=True)
class MetricTrend:
    metric: str
    current: float
    previous: float
    change_pct: float


# =========================
#   Helpers
# =========================

def mean_of(rows: Sequence[ResourceSample], metric: str) -> float:
    if not rows:
        return 0.0
    return sum(row.value(metric) for row in rows) / len(rows)


# =========================
#   Daily
# =========================

def daily_resource_averages(groups: DateGroup) -> List[DailyAggregate]:
    out = []
    for date in sorted_dates(groups):
        rows = groups[date]
        values = {
            attr: round_half_up(mean_of(rows, metric) / divisor)
            for metric, (attr, divisor) in DISPLAY_METRICS.items()
        }
        out.append(DailyAggregate(date=date, input_count=len(rows), **values))
    return out


def daily_input_counts(groups: DateGroup) -> List[DailyInputCount]:
    return [DailyInputCount(date=date, inputs=len(groups[date])) for date in sorted_dates(groups)]


def input_frequency_stats(counts: Sequence[DailyInputCount]) -> Tuple[int, int]:
    """(average inputs per day rounded to a whole number, peak inputs per day)."""
    if not counts:
        return 0, 0
    avg = sum(c.inputs for c in counts) / len(counts)
    return int(round_half_up(avg, 0)), max(c.inputs for c in counts)


# =========================
#   Monthly
# =========================

def monthly_statistics(groups: DateGroup) -> List[MonthlyAggregate]:
    """Average of daily averages per calendar month.

    Each day weighs the same however many rows it holds: a 10-row day at 50%
    CPU and a 1-row day at 90% give 70%, not 54.5%.
    """
    buckets: Dict[Tuple[int, int], Dict[str, float]] = {}
    for day in daily_resource_averages(groups):
        parsed = parse_calendar_date(day.date)
        if parsed is None:
            logger.warning("Date %r is not a calendar date; left out of monthly stats", day.date)
            continue
        bucket = buckets.setdefault(
            (parsed.year, parsed.month),
            {"cpu": 0.0, "memory": 0.0, "network": 0.0, "power": 0.0, "days": 0, "total_inputs": 0},
        )
        bucket["cpu"] += day.cpu
        bucket["memory"] += day.memory
        bucket["network"] += day.network
        bucket["power"] += day.power
        bucket["days"] += 1
        bucket["total_inputs"] += day.input_count

    out = []
    for (year, month), b in sorted(buckets.items()):
        days = b["days"]
        out.append(MonthlyAggregate(
            year=year,
            month=month,
            cpu=round_half_up(b["cpu"] / days),
            memory=round_half_up(b["memory"] / days),
            network=round_half_up(b["network"] / days),
            power=round_half_up(b["power"] / days),
            days=days,
            total_inputs=b["total_inputs"],
        ))
    return out


# =========================
#   Whole dataset
# =========================

def summary_metrics(records: Sequence[ResourceSample]) -> SummaryMetrics:
    """Dataset-wide KPIs.

    Totals and means include undated rows; the daily-input average and the
    date range only see dated ones.
    """
    total = len(records)
    dates = sorted({r.date for r in records if r.date})
    return SummaryMetrics(
        total_records=total,
        daily_inputs=total / len(dates) if dates else 0,
        avg_cpu=mean_of(records, "cpu_usage"),
        avg_memory=mean_of(records, "memory_usage"),
        avg_network=mean_of(records, "network_traffic"),
        avg_power=mean_of(records, "power_consumption"),
        start_date=dates[0] if dates else "",
        end_date=dates[-1] if dates else "",
    )


def metric_trend(
    daily: Sequence[DailyAggregate],
    metric: str,
    window: int = TREND_WINDOW_DAYS,
) -> Optional[MetricTrend]:
    """Percent change of the last ``window`` days against the ``window`` days before."""
    if window <= 0 or len(daily) < 2 * window:
        return None
    values = [getattr(d, metric) for d in daily]
    current = sum(values[-window:]) / window
    previous = sum(values[-2 * window:-window]) / window
    # an infinite window makes the change undefined
    if previous == 0 or not (math.isfinite(previous) and math.isfinite(current)):
        return None
    return MetricTrend(
        metric=metric,
        current=current,
        previous=previous,
        change_pct=round_half_up((current - previous) / previous * 100, 1),
    )


# =========================
#   Chart frames
# =========================

def daily_frame(daily: Sequence[DailyAggregate]) -> pd.DataFrame:
    cols = ["date", "input_count", "cpu", "memory", "network", "power"]
    df = pd.DataFrame([asdict(d) for d in daily], columns=cols)
    df["day"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def monthly_frame(monthly: Sequence[MonthlyAggregate]) -> pd.DataFrame:
    cols = ["month", "cpu", "memory", "network", "power", "days", "total_inputs"]
    rows = [{**asdict(m), "month": m.key} for m in monthly]
    return pd.DataFrame(rows, columns=cols)
