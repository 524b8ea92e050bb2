from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session, selectinload

from salon_commission.db.models import HoursEntryRow, Therapist, TransactionItemRow, TransactionRow
from salon_commission.ledger import DateBound, bound_date, validate_hours
from salon_commission.models import HoursEntry, LineItem, Number, TherapistProfile, Transaction
from salon_commission.revenue import as_datetime, transaction_revenue


def _stored(value) -> Decimal:
    """Strip the zero padding the column scale adds on the way back out."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return value.quantize(Decimal(1))
    return value.normalize()


def _to_profile(row: Therapist) -> TherapistProfile:
    return TherapistProfile(
        id=row.id,
        name=row.name,
        employment_type=row.employment_type,
        hourly_rate=_stored(row.hourly_rate) if row.hourly_rate is not None else None,
    )


def _to_entry(row: HoursEntryRow) -> HoursEntry:
    return HoursEntry(therapist_id=row.therapist_id, date=row.work_date, hours=_stored(row.hours))


def _to_transaction(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        therapist_id=row.therapist_id,
        date=row.date,
        items=[
            LineItem(
                name=item.name,
                category=item.category,
                price=Decimal(item.price),
                quantity=item.quantity,
                discount=Decimal(item.discount or 0),
            )
            for item in row.items
        ],
        subtotal=Decimal(row.subtotal),
        discount=Decimal(row.discount or 0),
        total=Decimal(row.total),
        customer_id=row.customer_id,
        customer_name=row.customer_name,
        payment_method=row.payment_method,
        status=row.status,
    )


class SqlTherapistDirectory:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, therapist_id: str) -> Optional[TherapistProfile]:
        row = self.session.get(Therapist, therapist_id)
        return _to_profile(row) if row else None

    def add(self, profile: TherapistProfile) -> TherapistProfile:
        row = Therapist(
            id=profile.id,
            name=profile.name,
            employment_type=profile.employment_type.value,
            hourly_rate=profile.hourly_rate,
        )
        self.session.add(row)
        self.session.commit()
        return profile

    def all(self) -> List[TherapistProfile]:
        rows = self.session.query(Therapist).order_by(Therapist.name.asc(), Therapist.id.asc()).all()
        return [_to_profile(row) for row in rows]


class SqlHoursLedger:
    """Hours ledger over the ``hours_entries`` table. Rows are only ever inserted."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add_entry(self, therapist_id: str, worked_date: date, hours: Number) -> HoursEntry:
        value = validate_hours(hours)
        row = HoursEntryRow(therapist_id=therapist_id, work_date=bound_date(worked_date), hours=value)
        self.session.add(row)
        self.session.commit()
        return _to_entry(row)

    def total_hours(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal:
        rows = (
            self.session.query(HoursEntryRow.hours)
            .filter(
                HoursEntryRow.therapist_id == therapist_id,
                HoursEntryRow.work_date >= bound_date(start),
                HoursEntryRow.work_date <= bound_date(end),
            )
            .all()
        )
        return sum((_stored(hours) for (hours,) in rows), Decimal("0"))

    def entries_for(self, therapist_id: str) -> "SqlTherapistEntries":
        return SqlTherapistEntries(self.session, therapist_id)


class SqlTherapistEntries:
    def __init__(self, session: Session, therapist_id: str) -> None:
        self.session = session
        self.therapist_id = therapist_id

    def __iter__(self) -> Iterator[HoursEntry]:
        query = (
            self.session.query(HoursEntryRow)
            .filter(HoursEntryRow.therapist_id == self.therapist_id)
            .order_by(HoursEntryRow.id.asc())
        )
        for row in query.yield_per(100):
            yield _to_entry(row)


class SqlTransactionStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, transaction_id: str) -> Optional[Transaction]:
        row = self.session.get(TransactionRow, transaction_id)
        return _to_transaction(row) if row else None

    def add(self, transaction: Transaction) -> Transaction:
        transaction.check_consistency()
        row = TransactionRow(
            id=transaction.id,
            therapist_id=transaction.therapist_id,
            customer_id=transaction.customer_id,
            customer_name=transaction.customer_name,
            date=transaction.date,
            subtotal=transaction.subtotal,
            discount=transaction.discount,
            total=transaction.total,
            payment_method=transaction.payment_method.value,
            status=transaction.status.value,
            items=[
                TransactionItemRow(
                    name=item.name,
                    category=item.category,
                    price=item.price,
                    quantity=item.quantity,
                    discount=item.discount,
                )
                for item in transaction.items
            ],
        )
        self.session.add(row)
        self.session.commit()
        return transaction

    def _query(self, start: DateBound, end: DateBound, therapist_id: Optional[str] = None):
        query = (
            self.session.query(TransactionRow)
            .options(selectinload(TransactionRow.items))
            .filter(TransactionRow.date >= as_datetime(start), TransactionRow.date <= as_datetime(end, end=True))
        )
        if therapist_id is not None:
            query = query.filter(TransactionRow.therapist_id == therapist_id)
        return query.order_by(TransactionRow.date.desc())

    def between(self, start: DateBound, end: DateBound) -> List[Transaction]:
        return [_to_transaction(row) for row in self._query(start, end)]

    def revenue_for(self, therapist_id: str, start: DateBound, end: DateBound) -> Decimal:
        transactions = [_to_transaction(row) for row in self._query(start, end, therapist_id)]
        return transaction_revenue(transactions, therapist_id)
