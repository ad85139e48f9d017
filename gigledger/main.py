"""
Ledger API application.

Run with:
  uvicorn gigledger.main:app --reload
"""

import logging

from fastapi import FastAPI

from gigledger.api.v1.auth import router as auth_router
from gigledger.api.v1.bookings import router as bookings_router
from gigledger.api.v1.expenses import router as expenses_router
from gigledger.api.v1.payments import router as payments_router
from gigledger.api.v1.reports import router as reports_router
from gigledger.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "payment_id", "expense_id", "collection", "email", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Ledger", version="1.0.0")

app.include_router(auth_router, tags=["auth"])
app.include_router(bookings_router, tags=["bookings"])
app.include_router(payments_router, tags=["payments"])
app.include_router(expenses_router, tags=["expenses"])
app.include_router(reports_router, tags=["reports"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
