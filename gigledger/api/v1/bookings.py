from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from gigledger.api.v1.schemas import (
    BookingBalanceSchema,
    BookingRequestSchema,
    BookingSchema,
    BookingStatusRequestSchema,
)
from gigledger.application.exceptions import (
    CorruptCollectionError,
    InvalidQueryError,
    RecordNotFoundError,
    ValidationError,
)
from gigledger.application.use_cases.bookings import BookingService
from gigledger.application.use_cases.payments import PaymentService
from gigledger.application.utils.aggregates import booking_balance, suggested_payment_amount
from gigledger.application.utils.query import ListQuery
from gigledger.wiring.dependencies import get_booking_service, get_payment_service, require_user

router = APIRouter(prefix="/bookings", dependencies=[Depends(require_user)])


@router.get("", response_model=list[BookingSchema])
def list_bookings(
    search: str = "",
    status: str | None = Query(None),
    event_type: str | None = Query(None),
    timeframe: str = "all",
    sort: str | None = Query(None),
    svc: BookingService = Depends(get_booking_service),
):
    query = ListQuery(
        search=search,
        equals={"status": status, "event_type": event_type},
        timeframe=timeframe,
        sort=sort,
    )
    try:
        bookings = svc.list(query)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [BookingSchema.from_entity(b) for b in bookings]


@router.get("/calendar", response_model=list[BookingSchema])
def booking_calendar(
    start: datetime,
    end: datetime,
    svc: BookingService = Depends(get_booking_service),
):
    try:
        bookings = svc.calendar(start, end)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [BookingSchema.from_entity(b) for b in bookings]


@router.post("", response_model=BookingSchema, status_code=201)
def create_booking(
    req: BookingRequestSchema,
    svc: BookingService = Depends(get_booking_service),
):
    try:
        booking = svc.create(req.model_dump(mode="json"))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return BookingSchema.from_entity(booking)


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: str, svc: BookingService = Depends(get_booking_service)):
    try:
        return BookingSchema.from_entity(svc.get(booking_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{booking_id}", response_model=BookingSchema)
def update_booking(
    booking_id: str,
    req: BookingRequestSchema,
    svc: BookingService = Depends(get_booking_service),
):
    try:
        booking = svc.update(booking_id, req.model_dump(mode="json"))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return BookingSchema.from_entity(booking)


@router.patch("/{booking_id}/status", response_model=BookingSchema)
def set_booking_status(
    booking_id: str,
    req: BookingStatusRequestSchema,
    svc: BookingService = Depends(get_booking_service),
):
    try:
        booking = svc.set_status(booking_id, req.status.value)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return BookingSchema.from_entity(booking)


@router.delete("/{booking_id}", status_code=204)
def delete_booking(booking_id: str, svc: BookingService = Depends(get_booking_service)):
    try:
        removed = svc.delete(booking_id)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail=f"bookings record '{booking_id}' not found")
    return Response(status_code=204)


@router.get("/{booking_id}/balance", response_model=BookingBalanceSchema)
def get_booking_balance(
    booking_id: str,
    svc: BookingService = Depends(get_booking_service),
    payments: PaymentService = Depends(get_payment_service),
):
    try:
        booking = svc.get(booking_id)
        related = payments.list(ListQuery(equals={"booking_id": booking_id}))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    balance = booking_balance(booking, related)
    return BookingBalanceSchema(
        booking_id=booking.id,
        suggested_payment=suggested_payment_amount(booking),
        **balance,
    )
