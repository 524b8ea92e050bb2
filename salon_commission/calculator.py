from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .models import ZERO, CommissionBreakdown, EmploymentType, Number, TherapistProfile, to_decimal


@dataclass(frozen=True)
class RateCard:
    holiday_pay_rate: Decimal = Decimal("0.12")
    employer_nic_rate: Decimal = Decimal("0.138")
    commission_rate: Decimal = Decimal("0.10")
    self_employed_share: Decimal = Decimal("0.40")

    @property
    def salon_share_rate(self) -> Decimal:
        return 1 - self.self_employed_share


class CompensationCalculator:
    """Splits a therapist's revenue between therapist and salon.

    Employed therapists are paid wage plus a commission on whatever revenue is
    left after wage, holiday pay and employer NIC. Self-employed therapists take
    a flat share of revenue.
    """

    def __init__(self, rate_card: Optional[RateCard] = None):
        self.rate_card = rate_card or RateCard()

    def _self_employed(self, revenue: Decimal, hours: Decimal) -> CommissionBreakdown:
        therapist_share = revenue * self.rate_card.self_employed_share
        return CommissionBreakdown(
            employment_type=EmploymentType.SELF_EMPLOYED,
            revenue=revenue,
            hours=hours,
            therapist_share=therapist_share,
            salon_share=revenue * self.rate_card.salon_share_rate,
        )

    def _employed(self, rate: Decimal, revenue: Decimal, hours: Decimal) -> CommissionBreakdown:
        card = self.rate_card
        wage = hours * rate
        holiday_pay = wage * card.holiday_pay_rate
        employer_nic = wage * card.employer_nic_rate
        costs = wage + holiday_pay + employer_nic
        # NIC is deducted from the pool even though the therapist never receives it.
        commission = max(revenue - costs, ZERO) * card.commission_rate
        therapist_share = wage + commission
        return CommissionBreakdown(
            employment_type=EmploymentType.EMPLOYED,
            revenue=revenue,
            hours=hours,
            wage=wage,
            holiday_pay=holiday_pay,
            employer_nic=employer_nic,
            commission=commission,
            therapist_share=therapist_share,
            salon_share=revenue - therapist_share,
        )

    def compute(self, profile: TherapistProfile, hours: Number, revenue: Number) -> CommissionBreakdown:
        hours = to_decimal(hours)
        revenue = to_decimal(revenue)
        if profile.is_employed:
            return self._employed(profile.hourly_rate, revenue, hours)
        return self._self_employed(revenue, hours)
