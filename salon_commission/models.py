from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import InconsistentTransaction

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    """Convert a money or hours value into a Decimal.

    Floats go through ``str`` so that form values like ``7.5`` stay exact.
    Raises ``ValueError`` for anything that does not parse.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Expected a number, got {value!r}") from exc


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero, the way receipts and the dashboard show amounts."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class EmploymentType(str, Enum):
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    OTHER = "other"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


@dataclass
class TherapistProfile:
    id: str
    name: str
    employment_type: EmploymentType
    hourly_rate: Optional[Decimal] = None

    def __post_init__(self) -> None:
        try:
            self.employment_type = EmploymentType(self.employment_type)
        except ValueError as exc:
            raise ValueError(f"Unknown employment type {self.employment_type!r}") from exc
        if self.hourly_rate is not None:
            self.hourly_rate = to_decimal(self.hourly_rate)
        if self.employment_type is EmploymentType.EMPLOYED:
            if self.hourly_rate is None or not self.hourly_rate.is_finite() or self.hourly_rate <= 0:
                raise ValueError(f"Employed therapist {self.id} needs a positive hourly rate")

    @property
    def is_employed(self) -> bool:
        return self.employment_type is EmploymentType.EMPLOYED


@dataclass(frozen=True)
class HoursEntry:
    therapist_id: str
    date: date
    hours: Decimal


@dataclass
class LineItem:
    name: str
    price: Decimal
    quantity: int = 1
    discount: Decimal = ZERO
    category: Optional[str] = None

    def __post_init__(self) -> None:
        self.price = to_decimal(self.price)
        self.discount = to_decimal(self.discount)
        quantity = to_decimal(self.quantity)
        if not quantity.is_finite() or quantity != quantity.to_integral_value():
            raise ValueError(f"Quantity must be a whole number, got {self.quantity!r}")
        self.quantity = int(quantity)

    @property
    def amount(self) -> Decimal:
        return self.price * self.quantity - self.discount


@dataclass
class Transaction:
    id: str
    therapist_id: str
    date: datetime
    items: List[LineItem]
    subtotal: Decimal
    total: Decimal
    discount: Decimal = ZERO
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    status: TransactionStatus = TransactionStatus.COMPLETED

    def __post_init__(self) -> None:
        self.subtotal = to_decimal(self.subtotal)
        self.total = to_decimal(self.total)
        self.discount = to_decimal(self.discount)
        self.payment_method = PaymentMethod(self.payment_method)
        self.status = TransactionStatus(self.status)

    @property
    def items_total(self) -> Decimal:
        return sum((item.amount for item in self.items), ZERO)

    def check_consistency(self, tolerance: Decimal = Decimal("0.01")) -> None:
        if not self.items:
            raise InconsistentTransaction(f"Transaction {self.id} has no items")
        if abs(self.items_total - self.subtotal) > tolerance:
            raise InconsistentTransaction("Subtotal does not match items total")
        if abs(self.subtotal - self.discount - self.total) > tolerance:
            raise InconsistentTransaction("Total does not match subtotal minus discount")


@dataclass
class CommissionBreakdown:
    employment_type: EmploymentType
    revenue: Decimal
    hours: Decimal
    therapist_share: Decimal
    salon_share: Decimal
    wage: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    employer_nic: Decimal = ZERO
    commission: Decimal = ZERO

    @property
    def costs(self) -> Decimal:
        return self.wage + self.holiday_pay + self.employer_nic

    def as_dict(self, places: Optional[int] = None) -> Dict[str, object]:
        amounts = {
            "revenue": self.revenue,
            "hours": self.hours,
            "wage": self.wage,
            "holiday_pay": self.holiday_pay,
            "employer_nic": self.employer_nic,
            "commission": self.commission,
            "therapist_share": self.therapist_share,
            "salon_share": self.salon_share,
        }
        if places is not None:
            amounts = {key: round_money(value, places) for key, value in amounts.items()}
        return {"employment_type": self.employment_type.value, **amounts}
