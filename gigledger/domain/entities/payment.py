from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from gigledger.domain.fields import coerce_amount, parse_timestamp

PAYMENT_METHODS = ("cash", "creditCard", "bankTransfer", "venmo", "paypal", "check", "other")
PAYMENT_STATUSES = ("completed", "pending", "failed")


@dataclass(frozen=True)
class Payment:
    id: str
    booking_id: str
    amount: float
    method: str = "cash"
    status: str = "completed"
    payment_date: datetime | None = None
    transaction_id: str = ""
    notes: str = ""

    def to_record(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "bookingId": self.booking_id,
            "amount": self.amount,
            "paymentMethod": self.method,
            "status": self.status,
            "paymentDate": self.payment_date.date().isoformat() if self.payment_date else None,
            "transactionId": self.transaction_id,
            "notes": self.notes,
        }

    @staticmethod
    def from_record(data: dict[str, Any]) -> "Payment":
        # Older records carry the date under "date".
        return Payment(
            id=str(data.get("_id") or data.get("id") or ""),
            booking_id=str(data.get("bookingId") or ""),
            amount=coerce_amount(data.get("amount")),
            method=str(data.get("paymentMethod") or "other"),
            status=str(data.get("status") or "pending"),
            payment_date=parse_timestamp(data.get("paymentDate") or data.get("date")),
            transaction_id=str(data.get("transactionId") or ""),
            notes=str(data.get("notes") or ""),
        )
