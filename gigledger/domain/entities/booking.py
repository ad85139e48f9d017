from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from gigledger.domain.fields import coerce_amount, format_timestamp, parse_timestamp
from gigledger.domain.status import PENDING, effective_status, pending_amount

EVENT_TYPES = ("wedding", "corporate", "birthday", "nightclub", "other")


@dataclass(frozen=True)
class Booking:
    id: str
    client_name: str
    client_phone: str
    event_type: str = "wedding"
    start: datetime | None = None
    end: datetime | None = None
    location: str = ""
    total_amount: float = 0.0
    deposit_amount: float = 0.0
    status: str = PENDING
    notes: str = ""

    @property
    def pending_amount(self) -> float:
        return pending_amount(self.total_amount, self.deposit_amount)

    @property
    def effective_status(self) -> str:
        return effective_status(self.total_amount, self.deposit_amount, self.status)

    def to_record(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "clientName": self.client_name,
            "clientPhone": self.client_phone,
            "eventType": self.event_type,
            "startDateTime": format_timestamp(self.start),
            "endDateTime": format_timestamp(self.end),
            "location": self.location,
            "totalAmount": self.total_amount,
            "depositAmount": self.deposit_amount,
            "pendingAmount": self.pending_amount,
            "status": self.status,
            "notes": self.notes,
        }

    @staticmethod
    def from_record(data: dict[str, Any]) -> "Booking":
        return Booking(
            id=str(data.get("_id") or data.get("id") or ""),
            client_name=str(data.get("clientName") or ""),
            client_phone=str(data.get("clientPhone") or ""),
            event_type=str(data.get("eventType") or "wedding"),
            start=parse_timestamp(data.get("startDateTime")),
            end=parse_timestamp(data.get("endDateTime")),
            location=str(data.get("location") or ""),
            total_amount=coerce_amount(data.get("totalAmount")),
            deposit_amount=coerce_amount(data.get("depositAmount")),
            status=str(data.get("status") or PENDING),
            notes=str(data.get("notes") or ""),
        )
