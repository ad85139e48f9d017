from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Callable, Iterable

from gigledger.application.utils.timeframes import localize
from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.expense import Expense
from gigledger.domain.entities.payment import Payment

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def sum_amounts(records: Iterable[Any]) -> float:
    return sum((record.amount for record in records), 0.0)


def completed_total(payments: Iterable[Payment]) -> float:
    return sum_amounts(p for p in payments if p.status == "completed")


def category_breakdown(expenses: Iterable[Expense]) -> dict[str, float]:
    breakdown: dict[str, float] = {}
    for expense in expenses:
        breakdown[expense.category] = breakdown.get(expense.category, 0.0) + expense.amount
    return breakdown


def monthly_buckets(
    records: Iterable[Any],
    date_of: Callable[[Any], datetime | None],
    year: int | None = None,
    tz: tzinfo | None = None,
) -> list[float]:
    """Twelve month totals; bucket[m] sums amounts dated in month m+1. Undated records are skipped."""
    buckets = [0.0] * 12
    for record in records:
        moment = date_of(record)
        if moment is None:
            continue
        if tz is not None:
            moment = localize(moment, tz)
        if year is not None and moment.year != year:
            continue
        buckets[moment.month - 1] += record.amount
    return buckets


def booking_balance(booking: Booking, payments: Iterable[Payment]) -> dict[str, float]:
    """What has been collected against a booking: deposit plus completed payments."""
    paid = completed_total(p for p in payments if p.booking_id == booking.id)
    collected = booking.deposit_amount + paid
    return {
        "total": booking.total_amount,
        "deposit": booking.deposit_amount,
        "paid": paid,
        "outstanding": booking.total_amount - collected,
    }


def suggested_payment_amount(booking: Booking) -> float:
    """Default amount for a new payment against a booking."""
    return round(booking.pending_amount, 2)
