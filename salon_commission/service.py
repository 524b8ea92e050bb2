from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from .calculator import CompensationCalculator
from .core.logging import get_logger
from .core.observability import commission_counter, tracer
from .errors import InvalidHours, MissingProfile
from .ledger import DateBound
from .models import CommissionBreakdown, HoursEntry, Number, TherapistProfile
from .periods import Period, Window, window_for

logger = get_logger(__name__)


class TherapistDirectory(Protocol):
    def get(self, therapist_id: str) -> Optional[TherapistProfile]: ...

    def all(self) -> List[TherapistProfile]: ...


class Ledger(Protocol):
    def add_entry(self, therapist_id: str, worked_date: date, hours: Number) -> HoursEntry: ...

    def total_hours(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal: ...

    def entries_for(self, therapist_id: str) -> Iterable[HoursEntry]: ...


class RevenueLookup(Protocol):
    def revenue_for(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal: ...


class InMemoryDirectory:
    def __init__(self, profiles: Iterable[TherapistProfile] = ()) -> None:
        self.profiles = {profile.id: profile for profile in profiles}

    def add(self, profile: TherapistProfile) -> TherapistProfile:
        self.profiles[profile.id] = profile
        return profile

    def get(self, therapist_id: str) -> Optional[TherapistProfile]:
        return self.profiles.get(therapist_id)

    def all(self) -> List[TherapistProfile]:
        return sorted(self.profiles.values(), key=lambda p: p.name.lower())


class CommissionService:
    def __init__(
        self,
        directory: TherapistDirectory,
        ledger: Ledger,
        transactions: RevenueLookup,
        calculator: Optional[CompensationCalculator] = None,
    ) -> None:
        self.directory = directory
        self.ledger = ledger
        self.transactions = transactions
        self.calculator = calculator or CompensationCalculator()

    def profile(self, therapist_id: str) -> TherapistProfile:
        profile = self.directory.get(therapist_id)
        if profile is None:
            raise MissingProfile(therapist_id)
        return profile

    def add_hours_entry(self, therapist_id: str, worked_date: date, hours: Number) -> HoursEntry:
        try:
            entry = self.ledger.add_entry(therapist_id, worked_date, hours)
        except InvalidHours as exc:
            logger.warning("hours_entry_rejected", therapist_id=therapist_id, date=str(worked_date), reason=str(exc))
            raise
        logger.info("hours_entry_added", therapist_id=therapist_id, date=entry.date.isoformat(), hours=str(entry.hours))
        return entry

    def compute_commission(self, therapist_id: str, period_start: DateBound, period_end: DateBound) -> CommissionBreakdown:
        with tracer.start_as_current_span("compute_commission"):
            profile = self.profile(therapist_id)
            hours = self.ledger.total_hours(therapist_id, period_start, period_end)
            revenue = self.transactions.revenue_for(therapist_id, period_start, period_end)
            breakdown = self.calculator.compute(profile, hours, revenue)
        commission_counter.add(1, {"employment_type": profile.employment_type.value})
        logger.info(
            "commission_computed",
            therapist_id=therapist_id,
            start=str(period_start),
            end=str(period_end),
            therapist_share=str(breakdown.therapist_share),
        )
        return breakdown

    def commission_for_period(
        self, therapist_id: str, period: Union[Period, str], reference: Union[date, datetime]
    ) -> CommissionBreakdown:
        window = window_for(period, reference)
        return self.compute_commission(therapist_id, window.start, window.end)

    def payroll_summary(self, window: Window) -> List[Tuple[TherapistProfile, CommissionBreakdown]]:
        return [
            (profile, self.compute_commission(profile.id, window.start, window.end))
            for profile in self.directory.all()
        ]
