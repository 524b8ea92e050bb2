from datetime import datetime
from decimal import Decimal

import pytest

from salon_commission.calculator import CompensationCalculator
from salon_commission.errors import InconsistentTransaction
from salon_commission.models import EmploymentType, LineItem, TherapistProfile, Transaction, round_money, to_decimal


def test_to_decimal_keeps_float_form_values_exact():
    assert to_decimal(7.5) == Decimal("7.5")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(" 12 ") == Decimal("12")


@pytest.mark.parametrize("value", ["abc", None, True])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_decimal(value)


def test_profile_coerces_employment_type():
    profile = TherapistProfile(id="t1", name="Amy", employment_type="self-employed")

    assert profile.employment_type is EmploymentType.SELF_EMPLOYED
    assert not profile.is_employed


def test_profile_rejects_unknown_employment_type():
    with pytest.raises(ValueError):
        TherapistProfile(id="t1", name="Amy", employment_type="contractor")


@pytest.mark.parametrize("rate", [None, "0", "-5"])
def test_employed_profile_requires_positive_rate(rate):
    with pytest.raises(ValueError):
        TherapistProfile(id="t1", name="Amy", employment_type="employed", hourly_rate=rate)


def test_line_item_amount():
    item = LineItem(name="Facial", price="45.00", quantity=2, discount="5")

    assert item.amount == Decimal("85.00")


def build_transaction(**overrides) -> Transaction:
    fields = dict(
        id="tx1",
        therapist_id="t1",
        date=datetime(2024, 2, 10, 14, 30),
        items=[LineItem(name="Facial", price="45", quantity=2, discount="5"), LineItem(name="Nails", price="20")],
        subtotal="105",
        discount="10",
        total="95",
        payment_method="card",
    )
    fields.update(overrides)
    return Transaction(**fields)


def test_transaction_consistency_passes_within_tolerance():
    build_transaction(subtotal="105.004").check_consistency()


def test_transaction_subtotal_mismatch_rejected():
    with pytest.raises(InconsistentTransaction, match="Subtotal"):
        build_transaction(subtotal="110").check_consistency()


def test_transaction_total_mismatch_rejected():
    with pytest.raises(InconsistentTransaction, match="Total"):
        build_transaction(total="105").check_consistency()


def test_transaction_without_items_rejected():
    with pytest.raises(InconsistentTransaction):
        build_transaction(items=[], subtotal="0", total="0", discount="0").check_consistency()


def test_transaction_rejects_unknown_payment_method():
    with pytest.raises(ValueError):
        build_transaction(payment_method="cheque")


def test_line_item_coerces_quantity():
    item = LineItem(name="Wax", price="10", quantity="2")

    assert item.quantity == 2
    assert item.amount == Decimal("20")


@pytest.mark.parametrize("quantity", ["1.5", "two"])
def test_line_item_rejects_non_whole_quantity(quantity):
    with pytest.raises(ValueError):
        LineItem(name="Wax", price="10", quantity=quantity)


def test_rounded_amounts_round_half_up():
    profile = TherapistProfile(id="t1", name="Amy", employment_type="self-employed")
    breakdown = CompensationCalculator().compute(profile, 0, Decimal("0.125"))

    amounts = breakdown.as_dict(places=2)

    assert amounts["revenue"] == Decimal("0.13")
    assert amounts["therapist_share"] == Decimal("0.05")
    assert amounts["salon_share"] == Decimal("0.08")
    assert round_money(Decimal("2.675")) == Decimal("2.68")
