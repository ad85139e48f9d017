from __future__ import annotations

from typing import Any

from gigledger.domain.fields import coerce_amount

PENDING = "Pending"
CONFIRMED = "Confirmed"
CANCELLED = "Cancelled"
COMPLETED = "Completed"

BOOKING_STATUSES = (PENDING, CONFIRMED, CANCELLED, COMPLETED)
# Statuses that can only be set by hand and survive a recompute.
MANUAL_STATUSES = frozenset({CANCELLED, COMPLETED})


def pending_amount(total: Any, deposit: Any) -> float:
    return coerce_amount(total) - coerce_amount(deposit)


def derive_status(total: Any, deposit: Any) -> str:
    """Confirmed when nothing is owed (or nothing was charged), Pending otherwise."""
    total_amount = coerce_amount(total)
    if total_amount == 0 or pending_amount(total_amount, deposit) <= 0:
        return CONFIRMED
    return PENDING


def effective_status(total: Any, deposit: Any, stored_status: str | None = None) -> str:
    """
    Status to show and filter on.
    A manually set Cancelled/Completed wins; anything else is derived from the amounts.
    """
    if stored_status in MANUAL_STATUSES:
        return stored_status
    return derive_status(total, deposit)
