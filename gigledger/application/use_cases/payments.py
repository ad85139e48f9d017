from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

from gigledger.application.exceptions import RecordNotFoundError, ValidationError
from gigledger.application.ports.ledger_store import BOOKINGS, PAYMENTS, LedgerStorePort, Records
from gigledger.application.utils.aggregates import completed_total, suggested_payment_amount, sum_amounts
from gigledger.application.utils.ids import timestamp_id
from gigledger.application.utils.query import ListQuery, QueryFields, filter_records
from gigledger.application.utils.validation import is_blank, read_amount, read_choice, read_timestamp
from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.payment import PAYMENT_METHODS, PAYMENT_STATUSES, Payment


class PaymentService:
    """Payments are append-only: they can be recorded and read, never edited."""

    def __init__(
        self,
        store: LedgerStorePort,
        timezone: ZoneInfo,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def _load(self) -> list[Payment]:
        return [Payment.from_record(r) for r in self._store.read_collection(PAYMENTS)]

    def _bookings_by_id(self) -> dict[str, Booking]:
        bookings = (Booking.from_record(r) for r in self._store.read_collection(BOOKINGS))
        return {b.id: b for b in bookings}

    def _query_fields(self, bookings: dict[str, Booking]) -> QueryFields:
        def client_name(payment: Payment) -> str:
            booking = bookings.get(payment.booking_id)
            return booking.client_name if booking else ""

        return QueryFields(
            search=lambda p: (client_name(p),),
            date=lambda p: p.payment_date,
            amount=lambda p: p.amount,
            filters={
                "status": lambda p: p.status,
                "method": lambda p: p.method,
                "booking_id": lambda p: p.booking_id,
            },
        )

    def list(self, query: ListQuery | None = None) -> list[Payment]:
        fields = self._query_fields(self._bookings_by_id())
        return filter_records(self._load(), query or ListQuery(), fields, self._clock())

    def list_with_bookings(self, query: ListQuery | None = None) -> list[tuple[Payment, Booking | None]]:
        """Filtered payments paired with their booking; None when the booking is gone."""
        bookings = self._bookings_by_id()
        payments = filter_records(self._load(), query or ListQuery(), self._query_fields(bookings), self._clock())
        return [(p, bookings.get(p.booking_id)) for p in payments]

    def get(self, payment_id: str) -> Payment:
        for payment in self._load():
            if payment.id == payment_id:
                return payment
        raise RecordNotFoundError(PAYMENTS, payment_id)

    def summary(self, query: ListQuery | None = None) -> dict[str, Any]:
        payments = self.list(query)
        return {
            "count": len(payments),
            "total": sum_amounts(payments),
            "completed_total": completed_total(payments),
        }

    def record(self, payload: dict[str, Any]) -> Payment:
        errors: dict[str, str] = {}
        booking_id = payload.get("booking_id")
        booking: Booking | None = None
        if is_blank(booking_id):
            errors["booking_id"] = "Booking is required"
        else:
            booking = self._bookings_by_id().get(str(booking_id))
            if booking is None:
                errors["booking_id"] = f"Booking '{booking_id}' does not exist"

        method = read_choice(payload, errors, "method", "Payment method", PAYMENT_METHODS, "cash")
        status = read_choice(payload, errors, "status", "Status", PAYMENT_STATUSES, "completed")
        payment_date = read_timestamp(payload, errors, "payment_date", "Payment date")
        amount = read_amount(payload, errors, "amount", "Amount")
        if amount is None and "amount" not in errors and booking is not None:
            amount = suggested_payment_amount(booking)
        if amount is not None and amount <= 0 and "amount" not in errors:
            errors["amount"] = "Amount must be greater than zero"

        if errors:
            self._logger.warning("Payment rejected", extra={"reason": "; ".join(errors.values())})
            raise ValidationError(errors)

        now = self._clock()
        created: list[Payment] = []

        def _append(records: Records) -> Records:
            payment_id = timestamp_id(now, (str(r.get("_id")) for r in records), prefix="payment_")
            payment = Payment(
                id=payment_id,
                booking_id=str(booking_id),
                amount=float(amount),
                method=method,
                status=status,
                payment_date=payment_date or now,
                transaction_id="TRX-" + payment_id.removeprefix("payment_"),
                notes=str(payload.get("notes") or ""),
            )
            record = payment.to_record()
            created.append(Payment.from_record(record))
            return records + [record]

        self._store.update_collection(PAYMENTS, _append)
        payment = created[0]
        self._logger.info(
            "Payment recorded",
            extra={"payment_id": payment.id, "booking_id": payment.booking_id},
        )
        return payment
