from fastapi import APIRouter, Depends, HTTPException, Query

from gigledger.api.v1.schemas import FinancialSummarySchema
from gigledger.application.exceptions import CorruptCollectionError
from gigledger.application.use_cases.reports import ReportService
from gigledger.core.config import settings
from gigledger.wiring.dependencies import get_report_service, require_user

router = APIRouter(prefix="/reports", dependencies=[Depends(require_user)])


@router.get("/summary", response_model=FinancialSummarySchema)
def financial_summary(
    year: int | None = Query(None, ge=1970, le=9999),
    svc: ReportService = Depends(get_report_service),
):
    try:
        summary = svc.financial_summary(year=year)
    except CorruptCollectionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return FinancialSummarySchema(currency=settings.CURRENCY, year=year, **summary)
