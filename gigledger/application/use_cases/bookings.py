from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

from gigledger.application.exceptions import InvalidQueryError, RecordNotFoundError, ValidationError
from gigledger.application.ports.ledger_store import BOOKINGS, LedgerStorePort, Records
from gigledger.application.utils.ids import timestamp_id
from gigledger.application.utils.query import ListQuery, QueryFields, filter_records
from gigledger.application.utils.timeframes import localize
from gigledger.application.utils.validation import read_amount, read_choice, read_timestamp, require
from gigledger.domain.entities.booking import EVENT_TYPES, Booking
from gigledger.domain.status import BOOKING_STATUSES, PENDING, effective_status

BOOKING_QUERY_FIELDS = QueryFields(
    search=lambda b: (b.client_name, b.location),
    date=lambda b: b.start,
    amount=lambda b: b.total_amount,
    filters={
        "status": lambda b: b.effective_status,
        "event_type": lambda b: b.event_type,
    },
)


class BookingService:
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

    def _load(self) -> list[Booking]:
        return [Booking.from_record(r) for r in self._store.read_collection(BOOKINGS)]

    def list(self, query: ListQuery | None = None) -> list[Booking]:
        return filter_records(self._load(), query or ListQuery(), BOOKING_QUERY_FIELDS, self._clock())

    def get(self, booking_id: str) -> Booking:
        for booking in self._load():
            if booking.id == booking_id:
                return booking
        raise RecordNotFoundError(BOOKINGS, booking_id)

    def create(self, payload: dict[str, Any]) -> Booking:
        created: list[Booking] = []

        def _append(records: Records) -> Records:
            booking_id = timestamp_id(self._clock(), (str(r.get("_id")) for r in records))
            booking = _build_booking(booking_id, payload, stored_status=None)
            created.append(booking)
            return records + [booking.to_record()]

        self._store.update_collection(BOOKINGS, _append)
        booking = created[0]
        self._logger.info("Booking created", extra={"booking_id": booking.id})
        return booking

    def update(self, booking_id: str, payload: dict[str, Any]) -> Booking:
        updated: list[Booking] = []

        def _replace(records: Records) -> Records:
            result: Records = []
            for record in records:
                if record.get("_id") == booking_id and not updated:
                    booking = _build_booking(booking_id, payload, stored_status=record.get("status"))
                    updated.append(booking)
                    result.append(booking.to_record())
                else:
                    result.append(record)
            if not updated:
                raise RecordNotFoundError(BOOKINGS, booking_id)
            return result

        self._store.update_collection(BOOKINGS, _replace)
        self._logger.info("Booking updated", extra={"booking_id": booking_id})
        return updated[0]

    def set_status(self, booking_id: str, status: str) -> Booking:
        """Set a status by hand. Cancelled/Completed stick; Pending/Confirmed fall back to the derived value."""
        if status not in BOOKING_STATUSES:
            raise ValidationError({"status": f"status must be one of: {', '.join(BOOKING_STATUSES)}"})
        updated: list[Booking] = []

        def _set(records: Records) -> Records:
            result: Records = []
            for record in records:
                if record.get("_id") == booking_id and not updated:
                    current = Booking.from_record(record)
                    new_status = effective_status(current.total_amount, current.deposit_amount, status)
                    record = {**record, "status": new_status}
                    updated.append(Booking.from_record(record))
                result.append(record)
            if not updated:
                raise RecordNotFoundError(BOOKINGS, booking_id)
            return result

        self._store.update_collection(BOOKINGS, _set)
        self._logger.info("Booking status set", extra={"booking_id": booking_id, "reason": updated[0].status})
        return updated[0]

    def delete(self, booking_id: str) -> bool:
        """Remove a booking. Returns False (and writes nothing) when the id isn't there."""
        removed = False

        def _remove(records: Records) -> Records:
            nonlocal removed
            remaining = [r for r in records if r.get("_id") != booking_id]
            if len(remaining) == len(records):
                return records
            removed = True
            return remaining

        self._store.update_collection(BOOKINGS, _remove)
        if removed:
            # Payments keep their booking_id; they are shown without client details afterwards.
            self._logger.info("Booking deleted", extra={"booking_id": booking_id})
        return removed

    def calendar(self, start: datetime, end: datetime) -> list[Booking]:
        """Bookings whose [start, end) overlaps the window. Bookings without both times are skipped."""
        window_start = localize(start, self._timezone)
        window_end = localize(end, self._timezone)
        if window_end <= window_start:
            raise InvalidQueryError("Calendar window end must be after its start")
        events: list[Booking] = []
        for booking in self._load():
            if not booking.id or booking.start is None or booking.end is None:
                self._logger.warning("Skipping booking without schedule", extra={"booking_id": booking.id})
                continue
            event_start = localize(booking.start, self._timezone)
            event_end = localize(booking.end, self._timezone)
            if event_start < window_end and event_end > window_start:
                events.append(booking)
        events.sort(key=lambda b: localize(b.start, self._timezone))
        return events


def _build_booking(booking_id: str, payload: dict[str, Any], stored_status: str | None) -> Booking:
    errors: dict[str, str] = {}
    require(payload, errors, "client_name", "Client name")
    require(payload, errors, "client_phone", "Phone")
    require(payload, errors, "start", "Start date/time")
    require(payload, errors, "end", "End date/time")
    require(payload, errors, "location", "Location")
    require(payload, errors, "total_amount", "Total amount")
    event_type = read_choice(payload, errors, "event_type", "Event type", EVENT_TYPES, "wedding")
    start = read_timestamp(payload, errors, "start", "Start date/time")
    end = read_timestamp(payload, errors, "end", "End date/time")
    total = read_amount(payload, errors, "total_amount", "Total amount")
    deposit = read_amount(payload, errors, "deposit_amount", "Deposit amount")

    if start is not None and end is not None:
        if (start.tzinfo is None) != (end.tzinfo is None):
            errors["end"] = "Start and end must both include a timezone or both omit it"
        elif end <= start:
            errors["end"] = "End time must be after start time"

    if errors:
        raise ValidationError(errors)

    total = total or 0.0
    deposit = deposit or 0.0
    return Booking(
        id=booking_id,
        client_name=str(payload["client_name"]).strip(),
        client_phone=str(payload["client_phone"]).strip(),
        event_type=event_type,
        start=start,
        end=end,
        location=str(payload["location"]).strip(),
        total_amount=total,
        deposit_amount=deposit,
        status=effective_status(total, deposit, stored_status or PENDING),
        notes=str(payload.get("notes") or ""),
    )
