from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Iterator, List, Union

from .errors import InvalidHours
from .models import ZERO, HoursEntry, Number, to_decimal

DateBound = Union[date, datetime]


def bound_date(value: DateBound) -> date:
    return value.date() if isinstance(value, datetime) else value


def validate_hours(hours: Number) -> Decimal:
    try:
        value = to_decimal(hours)
    except (TypeError, ValueError) as exc:
        raise InvalidHours(f"Hours must be a number, got {hours!r}") from exc
    if not value.is_finite():
        raise InvalidHours(f"Hours must be finite, got {hours!r}")
    if value <= 0:
        raise InvalidHours(f"Hours must be greater than zero, got {hours!r}")
    return value


def sum_hours(entries: Iterable[HoursEntry], therapist_id: str, start: DateBound, end: DateBound) -> Decimal:
    first, last = bound_date(start), bound_date(end)
    return sum(
        (e.hours for e in entries if e.therapist_id == therapist_id and first <= e.date <= last),
        ZERO,
    )


class TherapistEntries:
    """Restartable view over one therapist's entries, in insertion order."""

    def __init__(self, entries: List[HoursEntry], therapist_id: str) -> None:
        self._entries = entries
        self.therapist_id = therapist_id

    def __iter__(self) -> Iterator[HoursEntry]:
        for entry in self._entries:
            if entry.therapist_id == self.therapist_id:
                yield entry


class HoursLedger:
    """Append-only record of hours worked per therapist and day.

    Same-day entries are never merged; they all count toward the total.
    """

    def __init__(self, entries: Iterable[HoursEntry] = ()) -> None:
        self._entries: List[HoursEntry] = list(entries)

    def add_entry(self, therapist_id: str, worked_date: date, hours: Number) -> HoursEntry:
        entry = HoursEntry(therapist_id=therapist_id, date=bound_date(worked_date), hours=validate_hours(hours))
        self._entries.append(entry)
        return entry

    def total_hours(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal:
        return sum_hours(self._entries, therapist_id, start, end)

    def entries_for(self, therapist_id: str) -> TherapistEntries:
        return TherapistEntries(self._entries, therapist_id)

    def __len__(self) -> int:
        return len(self._entries)
