from fastapi import APIRouter, Depends, HTTPException, Query

from gigledger.api.v1.schemas import PaymentRequestSchema, PaymentSchema, PaymentSummarySchema
from gigledger.application.exceptions import (
    CorruptCollectionError,
    InvalidQueryError,
    RecordNotFoundError,
    ValidationError,
)
from gigledger.application.use_cases.payments import PaymentService
from gigledger.application.utils.query import ListQuery
from gigledger.wiring.dependencies import get_payment_service, require_user

router = APIRouter(prefix="/payments", dependencies=[Depends(require_user)])


def _payment_query(
    search: str = "",
    status: str | None = Query(None),
    method: str | None = Query(None),
    booking_id: str | None = Query(None),
    timeframe: str = "thisMonth",
    sort: str | None = Query(None),
) -> ListQuery:
    return ListQuery(
        search=search,
        equals={"status": status, "method": method, "booking_id": booking_id},
        timeframe=timeframe,
        sort=sort,
    )


@router.get("", response_model=list[PaymentSchema])
def list_payments(
    query: ListQuery = Depends(_payment_query),
    svc: PaymentService = Depends(get_payment_service),
):
    try:
        rows = svc.list_with_bookings(query)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [PaymentSchema.from_entity(payment, booking) for payment, booking in rows]


@router.get("/summary", response_model=PaymentSummarySchema)
def payment_summary(
    query: ListQuery = Depends(_payment_query),
    svc: PaymentService = Depends(get_payment_service),
):
    try:
        return PaymentSummarySchema(**svc.summary(query))
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=PaymentSchema, status_code=201)
def record_payment(
    req: PaymentRequestSchema,
    svc: PaymentService = Depends(get_payment_service),
):
    try:
        payment = svc.record(req.model_dump(mode="json"))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return PaymentSchema.from_entity(payment)


@router.get("/{payment_id}", response_model=PaymentSchema)
def get_payment(payment_id: str, svc: PaymentService = Depends(get_payment_service)):
    try:
        return PaymentSchema.from_entity(svc.get(payment_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
