from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

from gigledger.application.exceptions import InvalidQueryError
from gigledger.application.utils.timeframes import in_timeframe, localize, timeframe_bounds

SORT_KEYS = ("date", "dateAsc", "amountDesc", "amountAsc")


@dataclass(frozen=True)
class ListQuery:
    search: str = ""
    equals: dict[str, str | None] = field(default_factory=dict)
    timeframe: str = "all"
    sort: str | None = None


@dataclass(frozen=True)
class QueryFields:
    """How a list query reads one kind of record."""

    search: Callable[[Any], Iterable[str]]
    date: Callable[[Any], datetime | None]
    amount: Callable[[Any], float]
    filters: dict[str, Callable[[Any], Any]] = field(default_factory=dict)


def _is_active(value: str | None) -> bool:
    return value is not None and value != "" and value != "all"


def filter_records(records: Sequence[Any], query: ListQuery, fields: QueryFields, now: datetime) -> list[Any]:
    """
    Apply equality filters, text search, timeframe and sort in one pass.
    Without a sort the input order is kept.
    """
    active = {name: value for name, value in query.equals.items() if _is_active(value)}
    for name in active:
        if name not in fields.filters:
            raise InvalidQueryError(f"Unknown filter '{name}'")
    if query.sort is not None and query.sort not in SORT_KEYS:
        raise InvalidQueryError(f"Unknown sort '{query.sort}'")
    timeframe_bounds(query.timeframe, now)

    needle = (query.search or "").strip().lower()
    result: list[Any] = []
    for record in records:
        if any(fields.filters[name](record) != value for name, value in active.items()):
            continue
        if needle and not any(needle in (text or "").lower() for text in fields.search(record)):
            continue
        if not in_timeframe(fields.date(record), query.timeframe, now):
            continue
        result.append(record)

    if query.sort in ("date", "dateAsc"):
        dated = [r for r in result if fields.date(r) is not None]
        undated = [r for r in result if fields.date(r) is None]
        dated.sort(key=lambda r: localize(fields.date(r), now.tzinfo), reverse=query.sort == "date")
        result = dated + undated
    elif query.sort in ("amountDesc", "amountAsc"):
        result.sort(key=fields.amount, reverse=query.sort == "amountDesc")
    return result
