from __future__ import annotations

from typing import Any
from zoneinfo import ZoneInfo

from gigledger.application.ports.ledger_store import BOOKINGS, EXPENSES, PAYMENTS, LedgerStorePort
from gigledger.application.utils.aggregates import MONTH_LABELS, monthly_buckets, sum_amounts
from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.expense import Expense
from gigledger.domain.entities.payment import Payment


def financial_summary(
    payments: list[Payment],
    expenses: list[Expense],
    bookings: list[Booking],
    year: int | None = None,
    tz: ZoneInfo | None = None,
) -> dict[str, Any]:
    """
    Revenue is every recorded payment, whatever its status.
    Totals cover all dates; `year` only narrows the monthly series.
    """
    revenue = sum_amounts(payments)
    spent = sum_amounts(expenses)
    monthly_revenue = monthly_buckets(payments, lambda p: p.payment_date, year=year, tz=tz)
    monthly_expenses = monthly_buckets(expenses, lambda e: e.expense_date, year=year, tz=tz)
    return {
        "revenue": revenue,
        "expenses": spent,
        "profit": revenue - spent,
        "bookings": len(bookings),
        "labels": list(MONTH_LABELS),
        "monthly_revenue": monthly_revenue,
        "monthly_expenses": monthly_expenses,
        "monthly_profit": [r - e for r, e in zip(monthly_revenue, monthly_expenses)],
    }


class ReportService:
    def __init__(self, store: LedgerStorePort, timezone: ZoneInfo) -> None:
        self._store = store
        self._timezone = timezone

    def financial_summary(self, year: int | None = None) -> dict[str, Any]:
        payments = [Payment.from_record(r) for r in self._store.read_collection(PAYMENTS)]
        expenses = [Expense.from_record(r) for r in self._store.read_collection(EXPENSES)]
        bookings = [Booking.from_record(r) for r in self._store.read_collection(BOOKINGS)]
        return financial_summary(payments, expenses, bookings, year=year, tz=self._timezone)
