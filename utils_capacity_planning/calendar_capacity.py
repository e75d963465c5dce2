# utils_capacity_planning/calendar_capacity.py

import calendar
import datetime
from dataclasses import dataclass
from typing import List, Optional, Tuple

from utils_capacity_planning.aggregation_capacity import DailyAggregate, daily_resource_averages
from utils_capacity_planning.grouping_capacity import DateGroup, parse_calendar_date
from utils_capacity_planning.settings_capacity import ACTIVITY_LEVELS, PEAK_LEVEL

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date_key: str
    input_count: int
    level: str


def activity_level(input_count: int) -> str:
    if input_count <= 0:
        return "none"
    for upper, label in ACTIVITY_LEVELS:
        if input_count < upper:
            return label
    return PEAK_LEVEL


def date_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def month_grid(groups: DateGroup, year: int, month: int) -> List[List[Optional[CalendarDay]]]:
    """Weeks (Sunday first) of the month; padding cells are None.

    Cells look up the zero-padded ISO key, so days stored under another date
    format show no activity.
    """
    weeks = []
    for week in calendar.Calendar(firstweekday=6).monthdayscalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append(None)
                continue
            key = date_key(year, month, day)
            count = len(groups.get(key, []))
            cells.append(CalendarDay(day=day, date_key=key, input_count=count, level=activity_level(count)))
        weeks.append(cells)
    return weeks


def available_months(groups: DateGroup) -> List[Tuple[int, int]]:
    months = set()
    for key in groups:
        parsed = parse_calendar_date(key)
        if parsed is not None:
            months.add((parsed.year, parsed.month))
    return sorted(months)


def default_month(groups: DateGroup, today: Optional[datetime.date] = None) -> Tuple[int, int]:
    """Latest month present in the data, else the current month."""
    months = available_months(groups)
    if months:
        return months[-1]
    today = today or datetime.date.today()
    return today.year, today.month


def shift_month(year: int, month: int, step: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + step
    return index // 12, index % 12 + 1


def day_detail(groups: DateGroup, key: Optional[str]) -> Optional[DailyAggregate]:
    if not key or key not in groups:
        return None
    return daily_resource_averages({key: groups[key]})[0]
