#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Seed a ledger data directory with a demo account and a few bookings, payments and expenses.

Usage:
  python3 scripts/seed_demo.py --data-dir ./data/ledger
  python3 scripts/seed_demo.py --data-dir ./data/ledger --email dj@example.com --password secret123
"""

import argparse
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from gigledger.application.exceptions import DuplicateRecordError
from gigledger.application.use_cases.accounts import AccountService
from gigledger.application.use_cases.bookings import BookingService
from gigledger.application.use_cases.expenses import ExpenseService
from gigledger.application.use_cases.payments import PaymentService
from gigledger.core.config import settings
from gigledger.infrastructure.store.json_store import JsonLedgerStore


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo ledger data")
    parser.add_argument("--data-dir", default=settings.DATA_DIR)
    parser.add_argument("--timezone", default=settings.BUSINESS_TIMEZONE)
    parser.add_argument("--name", default="Demo DJ")
    parser.add_argument("--email", default="demo@example.com")
    parser.add_argument("--password", default="change-me-please")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    tz = ZoneInfo(args.timezone)
    store = JsonLedgerStore(data_dir=args.data_dir)

    accounts = AccountService(store=store)
    try:
        accounts.register(name=args.name, email=args.email, password=args.password)
        print(f"Created account {args.email}")
    except DuplicateRecordError:
        print(f"Account {args.email} already exists")

    bookings = BookingService(store=store, timezone=tz)
    payments = PaymentService(store=store, timezone=tz)
    expenses = ExpenseService(store=store, timezone=tz)

    today = datetime.now(tz).replace(hour=19, minute=0, second=0, microsecond=0, tzinfo=None)
    demo_bookings = [
        ("Asha & Rohan", "wedding", "Grand Palace Hall", 60000, 20000, 10),
        ("Northwind Corp", "corporate", "Northwind HQ Rooftop", 35000, 35000, 3),
        ("Kabir's 30th", "birthday", "Skyline Lounge", 15000, 0, -12),
    ]
    for client, event_type, location, total, deposit, days in demo_bookings:
        start = today + timedelta(days=days)
        booking = bookings.create(
            {
                "client_name": client,
                "client_phone": "+91 98765 43210",
                "event_type": event_type,
                "start": start.isoformat(),
                "end": (start + timedelta(hours=5)).isoformat(),
                "location": location,
                "total_amount": total,
                "deposit_amount": deposit,
            }
        )
        print(f"Booking {booking.id}: {client} [{booking.effective_status}]")
        if booking.pending_amount > 0 and days < 0:
            payment = payments.record({"booking_id": booking.id, "method": "bankTransfer"})
            print(f"  Payment {payment.id}: {payment.amount:.2f}")

    for description, category, amount in (
        ("Speaker rental", "equipment", 4500),
        ("Fuel to venue", "travel", 1200),
        ("Music streaming licence", "software", 999),
    ):
        expense = expenses.create(
            {
                "description": description,
                "category": category,
                "amount": amount,
                "expense_date": today.date().isoformat(),
            }
        )
        print(f"Expense {expense.id}: {description} {amount:.2f}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
