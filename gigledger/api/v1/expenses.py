from fastapi import APIRouter, Depends, HTTPException, Query, Response

from gigledger.api.v1.schemas import ExpenseRequestSchema, ExpenseSchema, ExpenseSummarySchema
from gigledger.application.exceptions import (
    CorruptCollectionError,
    InvalidQueryError,
    RecordNotFoundError,
    ValidationError,
)
from gigledger.application.use_cases.expenses import ExpenseService
from gigledger.application.utils.query import ListQuery
from gigledger.wiring.dependencies import get_expense_service, require_user

router = APIRouter(prefix="/expenses", dependencies=[Depends(require_user)])


def _expense_query(
    search: str = "",
    category: str | None = Query(None),
    payment_method: str | None = Query(None),
    timeframe: str = "thisMonth",
    sort: str | None = "date",
) -> ListQuery:
    return ListQuery(
        search=search,
        equals={"category": category, "payment_method": payment_method},
        timeframe=timeframe,
        sort=sort,
    )


@router.get("", response_model=list[ExpenseSchema])
def list_expenses(
    query: ListQuery = Depends(_expense_query),
    svc: ExpenseService = Depends(get_expense_service),
):
    try:
        expenses = svc.list(query)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [ExpenseSchema.from_entity(e) for e in expenses]


@router.get("/summary", response_model=ExpenseSummarySchema)
def expense_summary(
    query: ListQuery = Depends(_expense_query),
    svc: ExpenseService = Depends(get_expense_service),
):
    try:
        return ExpenseSummarySchema(**svc.summary(query))
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=ExpenseSchema, status_code=201)
def create_expense(
    req: ExpenseRequestSchema,
    svc: ExpenseService = Depends(get_expense_service),
):
    try:
        expense = svc.create(req.model_dump(mode="json"))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ExpenseSchema.from_entity(expense)


@router.get("/{expense_id}", response_model=ExpenseSchema)
def get_expense(expense_id: str, svc: ExpenseService = Depends(get_expense_service)):
    try:
        return ExpenseSchema.from_entity(svc.get(expense_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{expense_id}", response_model=ExpenseSchema)
def update_expense(
    expense_id: str,
    req: ExpenseRequestSchema,
    svc: ExpenseService = Depends(get_expense_service),
):
    try:
        expense = svc.update(expense_id, req.model_dump(mode="json"))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ExpenseSchema.from_entity(expense)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: str, svc: ExpenseService = Depends(get_expense_service)):
    try:
        removed = svc.delete(expense_id)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail=f"expenses record '{expense_id}' not found")
    return Response(status_code=204)
