"""Date-range generation for month and week calendar views."""

from datetime import date, timedelta
from typing import List

from dateutil.relativedelta import relativedelta

from .slots import DayCell

GRID_CELLS = 42  # 6 weeks


def get_month_days(year: int, month: int) -> List[DayCell]:
    """
    Build a Sunday-first 6-row grid for a month.

    Leading cells are the tail of the previous month, trailing cells the
    head of the next month; both are flagged other_month.
    """
    first = date(year, month, 1)
    next_first = first + relativedelta(months=1)
    leading = (first.weekday() + 1) % 7  # Sunday = 0

    days = [
        DayCell(first - timedelta(days=i), other_month=True)
        for i in range(leading, 0, -1)
    ]
    day = first
    while day < next_first:
        days.append(DayCell(day))
        day += timedelta(days=1)

    remaining = GRID_CELLS - len(days)
    days.extend(
        DayCell(next_first + timedelta(days=i), other_month=True)
        for i in range(remaining)
    )
    return days


def get_week_start(day: date) -> date:
    """Monday on or before the given date."""
    weekday = day.isoweekday()  # Monday = 1 .. Sunday = 7
    return day - timedelta(days=weekday - 1)


def get_week_days(day: date) -> List[date]:
    """The seven dates, Monday to Sunday, of the week containing day."""
    start = get_week_start(day)
    return [start + timedelta(days=i) for i in range(7)]


def month_start(day: date, offset: int = 0) -> date:
    """First day of the month containing day, shifted by offset months."""
    return date(day.year, day.month, 1) + relativedelta(months=offset)
