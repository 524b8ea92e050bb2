from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from .models import ZERO, Transaction
from .periods import Window

DateBound = Union[date, datetime]


def as_datetime(value: DateBound, end: bool = False) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max if end else time.min)


def in_window(transactions: Iterable[Transaction], start: DateBound, end: DateBound) -> List[Transaction]:
    window = Window(start=as_datetime(start), end=as_datetime(end, end=True))
    return [tx for tx in transactions if window.contains(tx.date)]


def transaction_revenue(transactions: Iterable[Transaction], therapist_id: Optional[str] = None) -> Decimal:
    """Sum of price * quantity - discount over every line item."""
    total = ZERO
    for tx in transactions:
        if therapist_id is not None and tx.therapist_id != therapist_id:
            continue
        for item in tx.items:
            total += item.amount
    return total


class TransactionStore:
    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: List[Transaction] = []
        for tx in transactions:
            self.add(tx)

    def add(self, transaction: Transaction) -> Transaction:
        transaction.check_consistency()
        self._transactions.append(transaction)
        return transaction

    def between(self, start: DateBound, end: DateBound) -> List[Transaction]:
        return sorted(in_window(self._transactions, start, end), key=lambda tx: tx.date, reverse=True)

    def revenue_for(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal:
        return transaction_revenue(in_window(self._transactions, start, end), therapist_id)
