from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Tuple

from .models import ZERO, CommissionBreakdown, TherapistProfile, Transaction, round_money

ReportRow = Dict[str, Any]

GROUP_CHOICES = ("therapist", "customer", "service")

def _keys_for(transaction: Transaction, group_by: str, item_name: str) -> Tuple[str, str]:
    if group_by == "therapist":
        return transaction.therapist_id, transaction.therapist_id
    if group_by == "customer":
        key = transaction.customer_id or "walk-in"
        return key, transaction.customer_name or key
    return item_name, item_name


def revenue_by(transactions: Iterable[Transaction], group_by: str = "therapist") -> List[ReportRow]:
    """Group line-item revenue by therapist, customer or service."""
    group_by = group_by.lower()
    if group_by not in GROUP_CHOICES:
        raise ValueError(f"Unsupported grouping {group_by!r}; use one of {', '.join(GROUP_CHOICES)}")

    revenue: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    labels: Dict[str, str] = {}
    seen: Dict[str, set] = defaultdict(set)
    items: Dict[str, int] = defaultdict(int)

    for transaction in transactions:
        for item in transaction.items:
            key, label = _keys_for(transaction, group_by, item.name)
            labels.setdefault(key, label)
            revenue[key] += item.amount
            seen[key].add(transaction.id)
            items[key] += item.quantity

    rows = [
        {
            "group_by": group_by,
            "key": key,
            "label": labels[key],
            "revenue": round_money(total),
            "transactions": len(seen[key]),
            "items": items[key],
        }
        for key, total in revenue.items()
    ]
    return sorted(rows, key=lambda row: (-row["revenue"], row["key"]))


def commission_rows(breakdowns: Iterable[Tuple[TherapistProfile, CommissionBreakdown]]) -> List[ReportRow]:
    rows: List[ReportRow] = []
    for profile, breakdown in breakdowns:
        rows.append({"therapist_id": profile.id, "therapist_name": profile.name, **breakdown.as_dict(places=2)})
    return rows
