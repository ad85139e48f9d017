from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

from gigledger.application.exceptions import RecordNotFoundError, ValidationError
from gigledger.application.ports.ledger_store import EXPENSES, LedgerStorePort, Records
from gigledger.application.utils.aggregates import category_breakdown, sum_amounts
from gigledger.application.utils.ids import timestamp_id
from gigledger.application.utils.query import ListQuery, QueryFields, filter_records
from gigledger.application.utils.validation import read_amount, read_choice, read_timestamp, require
from gigledger.domain.entities.expense import EXPENSE_CATEGORIES, EXPENSE_PAYMENT_METHODS, Expense

EXPENSE_QUERY_FIELDS = QueryFields(
    search=lambda e: (e.description, e.category),
    date=lambda e: e.expense_date,
    amount=lambda e: e.amount,
    filters={
        "category": lambda e: e.category,
        "payment_method": lambda e: e.payment_method,
    },
)


class ExpenseService:
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

    def _load(self) -> list[Expense]:
        return [Expense.from_record(r) for r in self._store.read_collection(EXPENSES)]

    def list(self, query: ListQuery | None = None) -> list[Expense]:
        return filter_records(self._load(), query or ListQuery(), EXPENSE_QUERY_FIELDS, self._clock())

    def summary(self, query: ListQuery | None = None) -> dict[str, Any]:
        expenses = self.list(query)
        return {
            "count": len(expenses),
            "total": sum_amounts(expenses),
            "category_breakdown": category_breakdown(expenses),
        }

    def get(self, expense_id: str) -> Expense:
        for expense in self._load():
            if expense.id == expense_id:
                return expense
        raise RecordNotFoundError(EXPENSES, expense_id)

    def create(self, payload: dict[str, Any]) -> Expense:
        created: list[Expense] = []

        def _append(records: Records) -> Records:
            expense_id = timestamp_id(self._clock(), (str(r.get("_id")) for r in records))
            expense = _build_expense(expense_id, payload)
            created.append(expense)
            return records + [expense.to_record()]

        self._store.update_collection(EXPENSES, _append)
        self._logger.info("Expense created", extra={"expense_id": created[0].id})
        return created[0]

    def update(self, expense_id: str, payload: dict[str, Any]) -> Expense:
        updated: list[Expense] = []

        def _replace(records: Records) -> Records:
            result: Records = []
            for record in records:
                if record.get("_id") == expense_id and not updated:
                    expense = _build_expense(expense_id, payload)
                    updated.append(expense)
                    record = expense.to_record()
                result.append(record)
            if not updated:
                raise RecordNotFoundError(EXPENSES, expense_id)
            return result

        self._store.update_collection(EXPENSES, _replace)
        self._logger.info("Expense updated", extra={"expense_id": expense_id})
        return updated[0]

    def delete(self, expense_id: str) -> bool:
        removed = False

        def _remove(records: Records) -> Records:
            nonlocal removed
            remaining = [r for r in records if r.get("_id") != expense_id]
            if len(remaining) == len(records):
                return records
            removed = True
            return remaining

        self._store.update_collection(EXPENSES, _remove)
        if removed:
            self._logger.info("Expense deleted", extra={"expense_id": expense_id})
        return removed


def _build_expense(expense_id: str, payload: dict[str, Any]) -> Expense:
    errors: dict[str, str] = {}
    require(payload, errors, "description", "Description")
    require(payload, errors, "category", "Category")
    require(payload, errors, "amount", "Amount")
    require(payload, errors, "expense_date", "Date")
    category = read_choice(payload, errors, "category", "Category", EXPENSE_CATEGORIES, "equipment")
    method = read_choice(payload, errors, "payment_method", "Payment method", EXPENSE_PAYMENT_METHODS, "cash")
    amount = read_amount(payload, errors, "amount", "Amount")
    expense_date = read_timestamp(payload, errors, "expense_date", "Date")
    if errors:
        raise ValidationError(errors)

    return Expense(
        id=expense_id,
        description=str(payload["description"]).strip(),
        category=category,
        amount=amount or 0.0,
        expense_date=expense_date,
        payment_method=method,
        notes=str(payload.get("notes") or ""),
    )
