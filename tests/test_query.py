"""
Tests for list filtering: search, equality filters, timeframes and sorting.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gigledger.application.exceptions import InvalidQueryError
from gigledger.application.use_cases.bookings import BOOKING_QUERY_FIELDS
from gigledger.application.use_cases.expenses import EXPENSE_QUERY_FIELDS
from gigledger.application.utils.query import ListQuery, filter_records
from gigledger.application.utils.timeframes import timeframe_bounds
from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.expense import Expense

UTC = ZoneInfo("UTC")
NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


def _booking(booking_id: str, name: str, location: str, start: datetime | None, total: float, deposit: float) -> Booking:
    return Booking(
        id=booking_id,
        client_name=name,
        client_phone="555",
        start=start,
        end=None,
        location=location,
        total_amount=total,
        deposit_amount=deposit,
    )


BOOKINGS = [
    _booking("a", "Asha Rao", "Grand Palace", datetime(2025, 3, 20, 18, 0), 1000, 1000),
    _booking("b", "Rohan Mehta", "Skyline Lounge", datetime(2025, 4, 2, 20, 0), 1000, 400),
    _booking("c", "Kabir Singh", "Beach Club", datetime(2025, 2, 10, 19, 0), 0, 0),
    _booking("d", "Northwind", "Palace Gardens", datetime(2024, 12, 31, 21, 0), 500, 100),
]


def _ids(records) -> list[str]:
    return [r.id for r in records]


def test_status_filter_matches_derived_status_in_order():
    confirmed = filter_records(BOOKINGS[:3], ListQuery(equals={"status": "Confirmed"}), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(confirmed) == ["a", "c"]


def test_all_disables_filter():
    result = filter_records(BOOKINGS, ListQuery(equals={"status": "all"}), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(result) == ["a", "b", "c", "d"]


def test_search_is_case_insensitive_over_name_and_location():
    result = filter_records(BOOKINGS, ListQuery(search="PALACE"), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(result) == ["a", "d"]
    result = filter_records(BOOKINGS, ListQuery(search="rohan"), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(result) == ["b"]


@pytest.mark.parametrize(
    "timeframe,expected",
    [
        ("all", ["a", "b", "c", "d"]),
        ("upcoming", ["a", "b"]),
        ("past", ["c", "d"]),
        ("thisMonth", ["a"]),
        ("nextMonth", ["b"]),
        ("lastMonth", ["c"]),
        ("thisQuarter", ["a", "c"]),
        ("thisYear", ["a", "b", "c"]),
        ("lastYear", ["d"]),
    ],
)
def test_timeframes(timeframe, expected):
    result = filter_records(BOOKINGS, ListQuery(timeframe=timeframe), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(result) == expected


def test_undated_records_only_match_all():
    undated = [_booking("x", "No Date", "Nowhere", None, 10, 0)]
    assert _ids(filter_records(undated, ListQuery(timeframe="all"), BOOKING_QUERY_FIELDS, NOW)) == ["x"]
    assert filter_records(undated, ListQuery(timeframe="thisMonth"), BOOKING_QUERY_FIELDS, NOW) == []


def test_timeframe_bounds_wrap_across_years():
    january = datetime(2025, 1, 10, tzinfo=UTC)
    start, end = timeframe_bounds("lastMonth", january)
    assert start == datetime(2024, 12, 1, tzinfo=UTC)
    assert end == datetime(2025, 1, 1, tzinfo=UTC)

    december = datetime(2025, 12, 5, tzinfo=UTC)
    start, end = timeframe_bounds("nextMonth", december)
    assert start == datetime(2026, 1, 1, tzinfo=UTC)
    assert end == datetime(2026, 2, 1, tzinfo=UTC)

    start, end = timeframe_bounds("thisQuarter", december)
    assert start == datetime(2025, 10, 1, tzinfo=UTC)
    assert end == datetime(2026, 1, 1, tzinfo=UTC)


def test_sorting():
    newest = filter_records(BOOKINGS, ListQuery(sort="date"), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(newest) == ["b", "a", "c", "d"]
    oldest = filter_records(BOOKINGS, ListQuery(sort="dateAsc"), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(oldest) == ["d", "c", "a", "b"]
    by_amount = filter_records(BOOKINGS, ListQuery(sort="amountDesc"), BOOKING_QUERY_FIELDS, NOW)
    assert _ids(by_amount) == ["a", "b", "d", "c"]


def test_expense_search_covers_category():
    expenses = [
        Expense(id="1", description="Speaker rental", category="equipment", amount=100, expense_date=datetime(2025, 3, 1)),
        Expense(id="2", description="Fuel", category="travel", amount=50, expense_date=datetime(2025, 3, 2)),
    ]
    result = filter_records(expenses, ListQuery(search="trav"), EXPENSE_QUERY_FIELDS, NOW)
    assert _ids(result) == ["2"]
    result = filter_records(expenses, ListQuery(equals={"category": "equipment"}), EXPENSE_QUERY_FIELDS, NOW)
    assert _ids(result) == ["1"]


def test_unknown_query_values_raise():
    with pytest.raises(InvalidQueryError):
        filter_records(BOOKINGS, ListQuery(timeframe="someday"), BOOKING_QUERY_FIELDS, NOW)
    with pytest.raises(InvalidQueryError):
        filter_records([], ListQuery(timeframe="someday"), BOOKING_QUERY_FIELDS, NOW)
    with pytest.raises(InvalidQueryError):
        filter_records(BOOKINGS, ListQuery(sort="random"), BOOKING_QUERY_FIELDS, NOW)
    with pytest.raises(InvalidQueryError):
        filter_records(BOOKINGS, ListQuery(equals={"colour": "red"}), BOOKING_QUERY_FIELDS, NOW)
