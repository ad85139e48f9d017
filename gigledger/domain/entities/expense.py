from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from gigledger.domain.fields import coerce_amount, parse_timestamp

EXPENSE_CATEGORIES = (
    "equipment",
    "travel",
    "software",
    "marketing",
    "office",
    "venue",
    "contractors",
    "insurance",
    "other",
)
EXPENSE_PAYMENT_METHODS = ("cash", "creditCard", "bankTransfer", "paypal")


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    category: str = "equipment"
    amount: float = 0.0
    expense_date: datetime | None = None
    payment_method: str = "cash"
    notes: str = ""

    def to_record(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "expenseDate": self.expense_date.date().isoformat() if self.expense_date else None,
            "paymentMethod": self.payment_method,
            "notes": self.notes,
        }

    @staticmethod
    def from_record(data: dict[str, Any]) -> "Expense":
        return Expense(
            id=str(data.get("_id") or data.get("id") or ""),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or "other"),
            amount=coerce_amount(data.get("amount")),
            expense_date=parse_timestamp(data.get("expenseDate")),
            payment_method=str(data.get("paymentMethod") or "cash"),
            notes=str(data.get("notes") or ""),
        )
