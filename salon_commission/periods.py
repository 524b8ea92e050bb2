from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

DAY_START = time(0, 0, 0, 0)
DAY_END = time(23, 59, 59, 999000)


class Period(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Window:
    start: datetime
    end: datetime

    def contains(self, value: Union[date, datetime]) -> bool:
        if not isinstance(value, datetime):
            return self.start.date() <= value <= self.end.date()
        return self.start <= value <= self.end


def _as_date(reference: Union[date, datetime]) -> date:
    return reference.date() if isinstance(reference, datetime) else reference


def _span(first: date, last: date) -> Window:
    return Window(start=datetime.combine(first, DAY_START), end=datetime.combine(last, DAY_END))


def week_start(anchor: date) -> date:
    """Most recent Sunday on or before ``anchor``."""
    # date.weekday() counts Monday as 0, so Sunday sits at 6.
    return anchor - timedelta(days=(anchor.weekday() + 1) % 7)


def month_window(year: int, month: int) -> Window:
    _, last_day = monthrange(year, month)
    return _span(date(year, month, 1), date(year, month, last_day))


def window_for(period: Union[Period, str], reference: Union[date, datetime]) -> Window:
    try:
        period = Period(period)
    except ValueError as exc:
        raise ValueError(f"Unknown period {period!r}; expected one of day, week, month, year") from exc
    anchor = _as_date(reference)

    if period is Period.DAY:
        return _span(anchor, anchor)
    if period is Period.WEEK:
        start = week_start(anchor)
        return _span(start, start + timedelta(days=6))
    if period is Period.MONTH:
        return month_window(anchor.year, anchor.month)
    return _span(date(anchor.year, 1, 1), date(anchor.year, 12, 31))
