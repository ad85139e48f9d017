"""
Tests for aggregation: totals, category breakdown, monthly buckets and booking balances.
"""

from __future__ import annotations

from datetime import datetime

from gigledger.application.use_cases.reports import financial_summary
from gigledger.application.utils.aggregates import (
    booking_balance,
    category_breakdown,
    completed_total,
    monthly_buckets,
    suggested_payment_amount,
)
from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.expense import Expense
from gigledger.domain.entities.payment import Payment


def _payment(pid: str, amount: float, when: datetime | None, status: str = "completed", booking_id: str = "b1") -> Payment:
    return Payment(id=pid, booking_id=booking_id, amount=amount, status=status, payment_date=when)


def test_monthly_buckets_sum_by_month():
    payments = [
        _payment("p1", 100, datetime(2025, 1, 5)),
        _payment("p2", 200, datetime(2025, 1, 28)),
        _payment("p3", 50, datetime(2025, 2, 14)),
    ]
    buckets = monthly_buckets(payments, lambda p: p.payment_date)
    assert len(buckets) == 12
    assert buckets[0] == 300
    assert buckets[1] == 50
    assert buckets[2:] == [0.0] * 10


def test_monthly_buckets_skip_undated_and_other_years():
    payments = [
        _payment("p1", 100, datetime(2025, 1, 5)),
        _payment("p2", 70, datetime(2024, 1, 5)),
        _payment("p3", 999, None),
    ]
    assert monthly_buckets(payments, lambda p: p.payment_date)[0] == 170
    assert monthly_buckets(payments, lambda p: p.payment_date, year=2025)[0] == 100


def test_category_breakdown_and_completed_total():
    expenses = [
        Expense(id="1", description="Speakers", category="equipment", amount=300),
        Expense(id="2", description="Cables", category="equipment", amount=20),
        Expense(id="3", description="Taxi", category="travel", amount=15),
    ]
    assert category_breakdown(expenses) == {"equipment": 320, "travel": 15}

    payments = [
        _payment("p1", 100, None, status="completed"),
        _payment("p2", 40, None, status="pending"),
        _payment("p3", 60, None, status="failed"),
    ]
    assert completed_total(payments) == 100


def test_financial_summary():
    payments = [_payment("p1", 500, datetime(2025, 3, 1)), _payment("p2", 250, datetime(2025, 4, 1), status="pending")]
    expenses = [Expense(id="e1", description="Fuel", category="travel", amount=100, expense_date=datetime(2025, 3, 9))]
    bookings = [Booking(id="b1", client_name="Asha", client_phone="1")]

    summary = financial_summary(payments, expenses, bookings)

    assert summary["revenue"] == 750
    assert summary["expenses"] == 100
    assert summary["profit"] == 650
    assert summary["bookings"] == 1
    assert summary["monthly_revenue"][2] == 500
    assert summary["monthly_revenue"][3] == 250
    assert summary["monthly_expenses"][2] == 100
    assert summary["monthly_profit"][2] == 400
    assert summary["labels"][0] == "Jan"


def test_booking_balance_counts_deposit_and_completed_payments():
    booking = Booking(id="b1", client_name="Asha", client_phone="1", total_amount=1000, deposit_amount=400)
    payments = [
        _payment("p1", 350, None),
        _payment("p2", 100, None, status="failed"),
        _payment("p3", 999, None, booking_id="other"),
    ]
    balance = booking_balance(booking, payments)
    assert balance == {"total": 1000, "deposit": 400, "paid": 350, "outstanding": 250}
    assert suggested_payment_amount(booking) == 600
