from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException

from gigledger.application.exceptions import AuthenticationError
from gigledger.application.ports.ledger_store import LedgerStorePort
from gigledger.application.use_cases.accounts import AccountService
from gigledger.application.use_cases.bookings import BookingService
from gigledger.application.use_cases.expenses import ExpenseService
from gigledger.application.use_cases.payments import PaymentService
from gigledger.application.use_cases.reports import ReportService
from gigledger.core.config import settings
from gigledger.domain.entities.user import User
from gigledger.infrastructure.store.json_store import JsonLedgerStore
from gigledger.infrastructure.store.memory_store import MemoryLedgerStore


_ledger_store: LedgerStorePort | None = None


def get_ledger_store() -> LedgerStorePort:
    global _ledger_store
    if _ledger_store is None:
        logger = logging.getLogger(__name__)
        if settings.STORE_PROVIDER.lower() == "memory":
            logger.info("Using MemoryLedgerStore")
            _ledger_store = MemoryLedgerStore()
        else:
            logger.info("Using JsonLedgerStore", extra={"reason": settings.DATA_DIR})
            _ledger_store = JsonLedgerStore(data_dir=settings.DATA_DIR)
    return _ledger_store


def set_ledger_store(store: LedgerStorePort | None) -> None:
    """Swap the process-wide store (tests, scripts)."""
    global _ledger_store
    _ledger_store = store


def get_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.BUSINESS_TIMEZONE)
    except Exception:
        logging.getLogger(__name__).warning(
            "Unknown BUSINESS_TIMEZONE, falling back to UTC", extra={"reason": settings.BUSINESS_TIMEZONE}
        )
        return ZoneInfo("UTC")


def get_booking_service() -> BookingService:
    return BookingService(store=get_ledger_store(), timezone=get_timezone())


def get_payment_service() -> PaymentService:
    return PaymentService(store=get_ledger_store(), timezone=get_timezone())


def get_expense_service() -> ExpenseService:
    return ExpenseService(store=get_ledger_store(), timezone=get_timezone())


def get_report_service() -> ReportService:
    return ReportService(store=get_ledger_store(), timezone=get_timezone())


def get_account_service() -> AccountService:
    return AccountService(store=get_ledger_store(), session_ttl_seconds=settings.SESSION_TTL_HOURS * 3600)


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_user(
    token: str | None = Depends(bearer_token),
    accounts: AccountService = Depends(get_account_service),
) -> User | None:
    """Resolve the session user; a no-op when REQUIRE_AUTH is off."""
    if not settings.REQUIRE_AUTH:
        return None
    try:
        return accounts.current_user(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})
