# utils_capacity_planning/records_capacity.py

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from utils_capacity_planning.settings_capacity import DATE_COLUMNS, METRIC_COLUMNS

RowRecord = Dict[str, str]

# Longest numeric prefix, same rules as a browser's parseFloat()
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_number(raw: Any) -> Optional[float]:
    """Parse the leading number of ``raw`` or return None.

    "42" -> 42.0, " 3.5 " -> 3.5, "12abc" -> 12.0, "abc" -> None, "" -> None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return None if math.isnan(value) else value
    match = _NUMERIC_PREFIX.match(str(raw))
    if not match:
        return None
    token = match.group(1)
    if token.endswith("Infinity"):
        return float("-inf") if token.startswith("-") else float("inf")
    return float(token)


def to_number(raw: Any) -> float:
    """Parse-or-zero: absent and unparsable values count as 0 in aggregates."""
    value = parse_number(raw)
    return 0.0 if value is None else value


def resolve_date(row: Mapping[str, Any]) -> Optional[str]:
    for column in DATE_COLUMNS:
        value = row.get(column)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class ResourceSample:
    """One parsed CSV row with its recognized fields coerced."""

    date: Optional[str] = None
    cpu_usage: Optional[float] = None
    memory_usage: Optional[float] = None
    network_traffic: Optional[float] = None
    power_consumption: Optional[float] = None
    fields: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ResourceSample":
        return cls(
            date=resolve_date(row),
            cpu_usage=parse_number(row.get("cpu_usage")),
            memory_usage=parse_number(row.get("memory_usage")),
            network_traffic=parse_number(row.get("network_traffic")),
            power_consumption=parse_number(row.get("power_consumption")),
            fields=dict(row),
        )

    def value(self, metric: str) -> float:
        if metric not in METRIC_COLUMNS:
            raise KeyError(metric)
        number = getattr(self, metric)
        return 0.0 if number is None else number


def samples_from_rows(rows: Sequence[Mapping[str, Any]]) -> List[ResourceSample]:
    return [ResourceSample.from_row(row) for row in rows]


def round_half_up(value: float, digits: int = 2) -> float:
    """Round like Math.round(x * 100) / 100 (halves go up, not to even).

    Infinite and NaN values pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
