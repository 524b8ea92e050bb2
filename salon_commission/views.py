from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from .models import CommissionBreakdown, HoursEntry, TherapistProfile, round_money


def _money(value: Decimal) -> str:
    return f"£{round_money(value):,.2f}"


def format_commission(profile: TherapistProfile, breakdown: CommissionBreakdown, title: str = "") -> str:
    rows = [f"Commission for {profile.name}" + (f" ({title})" if title else ""), "Item                              Amount"]

    def line(label: str, value: str) -> None:
        rows.append(f"{label:<30}  {value:>10}")

    line("Total revenue", _money(breakdown.revenue))
    if profile.is_employed:
        line("Hours worked", f"{round_money(breakdown.hours):.2f}")
        line(f"Base wage ({_money(profile.hourly_rate)}/hr)", _money(breakdown.wage))
        line("Holiday pay", _money(breakdown.holiday_pay))
        line("Employer NIC", _money(breakdown.employer_nic))
        line("Commission (after costs)", _money(breakdown.commission))
        line("Total therapist earnings", _money(breakdown.therapist_share))
        line("Salon revenue", _money(breakdown.salon_share))
    else:
        line("Therapist share", _money(breakdown.therapist_share))
        line("Salon share", _money(breakdown.salon_share))
    return "\n".join(rows)


def format_hours_log(entries: Iterable[HoursEntry]) -> str:
    rows = ["Hours log", "Date        Hours"]
    total = Decimal("0")
    for entry in sorted(entries, key=lambda e: e.date, reverse=True):
        total += entry.hours
        rows.append(f"{entry.date.isoformat()}  {round_money(entry.hours):>5.2f}")
    rows.append(f"Total hours: {round_money(total):.2f}")
    return "\n".join(rows)
