from decimal import Decimal

import pytest

from salon_commission.calculator import CompensationCalculator, RateCard
from salon_commission.models import EmploymentType, TherapistProfile


def employed(rate="12") -> TherapistProfile:
    return TherapistProfile(id="t1", name="Amy", employment_type="employed", hourly_rate=rate)


def self_employed() -> TherapistProfile:
    return TherapistProfile(id="t2", name="Beth", employment_type="self-employed")


def test_employed_month_scenario():
    result = CompensationCalculator().compute(employed(), hours=160, revenue=3000)

    assert result.employment_type is EmploymentType.EMPLOYED
    assert result.wage == Decimal("1920")
    assert result.holiday_pay == Decimal("230.4")
    assert result.employer_nic == Decimal("264.96")
    assert result.costs == Decimal("2415.36")
    assert result.commission == Decimal("58.464")
    assert result.therapist_share == Decimal("1978.464")
    assert result.salon_share == Decimal("1021.536")


def test_self_employed_split():
    result = CompensationCalculator().compute(self_employed(), hours=0, revenue=1000)

    assert result.therapist_share == Decimal("400")
    assert result.salon_share == Decimal("600")
    assert result.wage == result.holiday_pay == result.employer_nic == result.commission == 0


def test_self_employed_ignores_hours():
    calc = CompensationCalculator()

    busy = calc.compute(self_employed(), hours=200, revenue="1234.56")
    idle = calc.compute(self_employed(), hours=0, revenue="1234.56")

    assert busy.therapist_share == idle.therapist_share == Decimal("1234.56") * Decimal("0.4")
    assert busy.salon_share == Decimal("1234.56") * Decimal("0.6")


def test_zero_hours_commission_is_ten_percent_of_revenue():
    result = CompensationCalculator().compute(employed(), hours=0, revenue=500)

    assert result.wage == 0
    assert result.holiday_pay == 0
    assert result.employer_nic == 0
    assert result.commission == Decimal("50")
    assert result.therapist_share == Decimal("50")


def test_commission_clamped_when_costs_exceed_revenue():
    result = CompensationCalculator().compute(employed("20"), hours=160, revenue=100)

    assert result.commission == 0
    assert result.therapist_share == result.wage
    assert result.salon_share < 0


def test_commission_uses_revenue_after_all_labour_costs():
    result = CompensationCalculator().compute(employed("10"), hours=10, revenue=1000)

    # costs = 100 + 12 + 13.8
    assert result.commission == (Decimal("1000") - Decimal("125.8")) * Decimal("0.10")


@pytest.mark.parametrize(
    "hours, revenue, rate",
    [("0", "0", "9.50"), ("7.5", "321.10", "11"), ("160", "3000", "12"), ("400", "50", "25"), ("1", "99999.99", "15.25")],
)
def test_shares_reconcile_with_revenue(hours, revenue, rate):
    calc = CompensationCalculator()
    for profile in (employed(rate), self_employed()):
        result = calc.compute(profile, hours=hours, revenue=revenue)
        assert abs(result.therapist_share + result.salon_share - Decimal(revenue)) <= Decimal("1e-9")


def test_custom_rate_card():
    card = RateCard(holiday_pay_rate=Decimal("0"), employer_nic_rate=Decimal("0"), commission_rate=Decimal("0.5"))
    result = CompensationCalculator(card).compute(employed("10"), hours=10, revenue=300)

    assert result.commission == Decimal("100")
    assert result.therapist_share == Decimal("200")


def test_as_dict_rounds_for_presentation():
    result = CompensationCalculator().compute(employed(), hours=160, revenue=3000)

    amounts = result.as_dict(places=2)

    assert amounts["employment_type"] == "employed"
    assert amounts["commission"] == Decimal("58.46")
    assert amounts["salon_share"] == Decimal("1021.54")
