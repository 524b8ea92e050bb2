"""Therapist hours ledger and commission engine for a beauty salon."""

from .calculator import CompensationCalculator, RateCard
from .errors import CommissionError, InconsistentTransaction, InvalidHours, MissingProfile
from .ledger import HoursLedger
from .models import CommissionBreakdown, EmploymentType, HoursEntry, TherapistProfile
from .periods import Period, Window, window_for
from .revenue import TransactionStore

__all__ = [
    "CommissionBreakdown",
    "CommissionError",
    "CompensationCalculator",
    "EmploymentType",
    "HoursEntry",
    "HoursLedger",
    "InconsistentTransaction",
    "InvalidHours",
    "MissingProfile",
    "Period",
    "RateCard",
    "TherapistProfile",
    "TransactionStore",
    "Window",
    "window_for",
]
