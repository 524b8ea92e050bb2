from __future__ import annotations

import argparse
import json
import sys
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Iterator
from uuid import uuid4

from sqlalchemy.orm import Session, sessionmaker

from .calculator import CompensationCalculator
from .core.config import settings
from .core.logging import configure_logging
from .db.repositories import SqlHoursLedger, SqlTherapistDirectory, SqlTransactionStore
from .db.session import build_engine, init_db
from .errors import CommissionError
from .exporter import export_csv
from .models import ZERO, LineItem, TherapistProfile, Transaction, round_money, to_decimal
from .periods import Window, month_window, window_for
from .reports import GROUP_CHOICES, commission_rows, revenue_by
from .service import CommissionService
from .views import format_commission, format_hours_log


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def parse_month(value: str) -> Window:
    year, month = value.split("-")
    return month_window(int(year), int(month))


@contextmanager
def session_from_args(args: argparse.Namespace) -> Iterator[Session]:
    engine = build_engine(args.database_url or settings.database_url)
    init_db(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def service_for(session: Session) -> CommissionService:
    return CommissionService(
        directory=SqlTherapistDirectory(session),
        ledger=SqlHoursLedger(session),
        transactions=SqlTransactionStore(session),
        calculator=CompensationCalculator(settings.rate_card()),
    )


def window_from_args(args: argparse.Namespace) -> Window:
    if args.start or args.end:
        if not (args.start and args.end):
            raise ValueError("Both --start and --end are required for a custom range")
        return Window(start=window_for("day", parse_date(args.start)).start, end=window_for("day", parse_date(args.end)).end)
    if args.month:
        return parse_month(args.month)
    return window_for("month", date.today())


def cmd_add_therapist(args: argparse.Namespace) -> None:
    profile = TherapistProfile(
        id=args.id or str(uuid4()),
        name=args.name,
        employment_type=args.employment_type,
        hourly_rate=args.hourly_rate,
    )
    with session_from_args(args) as session:
        directory = SqlTherapistDirectory(session)
        if directory.get(profile.id):
            raise ValueError(f"Therapist {profile.id} already exists")
        directory.add(profile)
    print(f"Added therapist {profile.id} ({profile.name}, {profile.employment_type.value})")


def cmd_add_hours(args: argparse.Namespace) -> None:
    with session_from_args(args) as session:
        entry = service_for(session).add_hours_entry(args.therapist, parse_date(args.date), args.hours)
    print(f"Added {entry.hours} hours for {entry.therapist_id} on {entry.date.isoformat()}")


def cmd_add_transaction(args: argparse.Namespace) -> None:
    items = [LineItem(**item) for item in json.loads(args.items)]
    subtotal = sum((item.amount for item in items), ZERO)
    discount = to_decimal(args.discount)
    transaction = Transaction(
        id=args.id or str(uuid4()),
        therapist_id=args.therapist,
        date=datetime.fromisoformat(args.date) if args.date else datetime.now(),
        items=items,
        subtotal=subtotal,
        discount=discount,
        total=subtotal - discount,
        customer_id=args.customer_id,
        customer_name=args.customer_name,
        payment_method=args.payment_method,
    )
    with session_from_args(args) as session:
        store = SqlTransactionStore(session)
        if store.get(transaction.id):
            raise ValueError(f"Transaction {transaction.id} already exists")
        store.add(transaction)
    print(f"Recorded transaction {transaction.id} total {round_money(transaction.total):.2f}")


def cmd_hours_log(args: argparse.Namespace) -> None:
    with session_from_args(args) as session:
        print(format_hours_log(SqlHoursLedger(session).entries_for(args.therapist)))


def cmd_commission(args: argparse.Namespace) -> None:
    window = window_from_args(args)
    with session_from_args(args) as session:
        service = service_for(session)
        profile = service.profile(args.therapist)
        breakdown = service.compute_commission(profile.id, window.start, window.end)
    title = f"{window.start.date().isoformat()} to {window.end.date().isoformat()}"
    print(format_commission(profile, breakdown, title=title))
    if args.output:
        path = export_csv(commission_rows([(profile, breakdown)]), Path(args.output))
        print(f"Commission report exported to {path}")


def cmd_summary(args: argparse.Namespace) -> None:
    window = window_from_args(args)
    with session_from_args(args) as session:
        rows = commission_rows(service_for(session).payroll_summary(window))
    if args.output:
        path = export_csv(rows, Path(args.output))
        print(f"Summary exported to {path}")
    else:
        print(json.dumps(rows, default=str, indent=2))


def cmd_revenue_report(args: argparse.Namespace) -> None:
    window = window_from_args(args)
    with session_from_args(args) as session:
        rows = revenue_by(SqlTransactionStore(session).between(window.start, window.end), args.group_by)
    if args.output:
        path = export_csv(rows, Path(args.output))
        print(f"Report exported to {path}")
    else:
        print(json.dumps(rows, default=str, indent=2))


def add_window_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--month", help="Month as YYYY-MM (defaults to the current month)")
    parser.add_argument("--start", help="Custom range start date")
    parser.add_argument("--end", help="Custom range end date")
    parser.add_argument("--output", help="Write the rows to a CSV file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Salon therapist hours and commission")
    parser.add_argument("--database-url", help="Override SALON_DATABASE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    therapist = sub.add_parser("add-therapist", help="Register a therapist profile")
    therapist.add_argument("name")
    therapist.add_argument("employment_type", choices=["employed", "self-employed"])
    therapist.add_argument("--hourly-rate")
    therapist.add_argument("--id")
    therapist.set_defaults(func=cmd_add_therapist)

    hours = sub.add_parser("add-hours", help="Log hours worked on a day")
    hours.add_argument("therapist")
    hours.add_argument("date")
    hours.add_argument("hours")
    hours.set_defaults(func=cmd_add_hours)

    transaction = sub.add_parser("add-transaction", help="Record a completed sale")
    transaction.add_argument("therapist")
    transaction.add_argument("items", help='JSON list, e.g. [{"name": "Facial", "price": "45", "quantity": 1}]')
    transaction.add_argument("--date", help="ISO timestamp (defaults to now)")
    transaction.add_argument("--discount", default="0")
    transaction.add_argument("--customer-id")
    transaction.add_argument("--customer-name")
    transaction.add_argument("--payment-method", choices=["cash", "card", "other"], default="cash")
    transaction.add_argument("--id")
    transaction.set_defaults(func=cmd_add_transaction)

    hours_log = sub.add_parser("hours-log", help="Show logged hours, newest first")
    hours_log.add_argument("therapist")
    hours_log.set_defaults(func=cmd_hours_log)

    commission = sub.add_parser("commission", help="Compute a therapist's commission")
    commission.add_argument("therapist")
    add_window_arguments(commission)
    commission.set_defaults(func=cmd_commission)

    summary = sub.add_parser("summary", help="Commission for every therapist")
    add_window_arguments(summary)
    summary.set_defaults(func=cmd_summary)

    revenue = sub.add_parser("revenue-report", help="Revenue grouped by therapist, customer or service")
    revenue.add_argument("--group-by", choices=GROUP_CHOICES, default="therapist")
    add_window_arguments(revenue)
    revenue.set_defaults(func=cmd_revenue_report)

    return parser


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (CommissionError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
