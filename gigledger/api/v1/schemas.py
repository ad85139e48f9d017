from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from gigledger.domain.entities.booking import Booking
from gigledger.domain.entities.expense import Expense
from gigledger.domain.entities.payment import Payment
from gigledger.domain.entities.user import User


class EventType(str, Enum):
    wedding = "wedding"
    corporate = "corporate"
    birthday = "birthday"
    nightclub = "nightclub"
    other = "other"


class BookingStatus(str, Enum):
    pending = "Pending"
    confirmed = "Confirmed"
    cancelled = "Cancelled"
    completed = "Completed"


class PaymentMethod(str, Enum):
    cash = "cash"
    credit_card = "creditCard"
    bank_transfer = "bankTransfer"
    venmo = "venmo"
    paypal = "paypal"
    check = "check"
    other = "other"


class PaymentStatus(str, Enum):
    completed = "completed"
    pending = "pending"
    failed = "failed"


class ExpenseCategory(str, Enum):
    equipment = "equipment"
    travel = "travel"
    software = "software"
    marketing = "marketing"
    office = "office"
    venue = "venue"
    contractors = "contractors"
    insurance = "insurance"
    other = "other"


class ExpensePaymentMethod(str, Enum):
    cash = "cash"
    credit_card = "creditCard"
    bank_transfer = "bankTransfer"
    paypal = "paypal"


# ---------- Auth ----------
class RegisterRequestSchema(BaseModel):
    name: str
    email: str
    password: str


class LoginRequestSchema(BaseModel):
    email: str
    password: str


class LoginResponseSchema(BaseModel):
    token: str
    token_type: str = "bearer"


class UserSchema(BaseModel):
    name: str
    email: str

    @staticmethod
    def from_entity(user: User) -> "UserSchema":
        return UserSchema(name=user.name, email=user.email)


# ---------- Bookings ----------
class BookingRequestSchema(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    client_name: str
    client_phone: str
    event_type: EventType = EventType.wedding
    start: datetime
    end: datetime
    location: str
    total_amount: float
    deposit_amount: float = 0.0
    notes: str = ""


class BookingStatusRequestSchema(BaseModel):
    status: BookingStatus


class BookingSchema(BaseModel):
    id: str
    client_name: str
    client_phone: str
    event_type: str
    start: datetime | None
    end: datetime | None
    location: str
    total_amount: float
    deposit_amount: float
    pending_amount: float
    status: str
    notes: str

    @staticmethod
    def from_entity(booking: Booking) -> "BookingSchema":
        return BookingSchema(
            id=booking.id,
            client_name=booking.client_name,
            client_phone=booking.client_phone,
            event_type=booking.event_type,
            start=booking.start,
            end=booking.end,
            location=booking.location,
            total_amount=booking.total_amount,
            deposit_amount=booking.deposit_amount,
            pending_amount=booking.pending_amount,
            status=booking.effective_status,
            notes=booking.notes,
        )


class BookingBalanceSchema(BaseModel):
    booking_id: str
    total: float
    deposit: float
    paid: float
    outstanding: float
    suggested_payment: float


# ---------- Payments ----------
class PaymentRequestSchema(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    booking_id: str
    amount: float | None = None
    method: PaymentMethod = PaymentMethod.cash
    status: PaymentStatus = PaymentStatus.completed
    payment_date: date | None = None
    notes: str = ""


class PaymentSchema(BaseModel):
    id: str
    booking_id: str
    client_name: str | None = None
    event_type: str | None = None
    amount: float
    method: str
    status: str
    payment_date: date | None
    transaction_id: str
    notes: str

    @staticmethod
    def from_entity(payment: Payment, booking: Booking | None = None) -> "PaymentSchema":
        return PaymentSchema(
            id=payment.id,
            booking_id=payment.booking_id,
            client_name=booking.client_name if booking else None,
            event_type=booking.event_type if booking else None,
            amount=payment.amount,
            method=payment.method,
            status=payment.status,
            payment_date=payment.payment_date.date() if payment.payment_date else None,
            transaction_id=payment.transaction_id,
            notes=payment.notes,
        )


class PaymentSummarySchema(BaseModel):
    count: int
    total: float
    completed_total: float


# ---------- Expenses ----------
class ExpenseRequestSchema(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    description: str
    category: ExpenseCategory = ExpenseCategory.equipment
    amount: float
    expense_date: date
    payment_method: ExpensePaymentMethod = ExpensePaymentMethod.cash
    notes: str = ""


class ExpenseSchema(BaseModel):
    id: str
    description: str
    category: str
    amount: float
    expense_date: date | None
    payment_method: str
    notes: str

    @staticmethod
    def from_entity(expense: Expense) -> "ExpenseSchema":
        return ExpenseSchema(
            id=expense.id,
            description=expense.description,
            category=expense.category,
            amount=expense.amount,
            expense_date=expense.expense_date.date() if expense.expense_date else None,
            payment_method=expense.payment_method,
            notes=expense.notes,
        )


class ExpenseSummarySchema(BaseModel):
    count: int
    total: float
    category_breakdown: dict[str, float] = Field(default_factory=dict)


# ---------- Reports ----------
class FinancialSummarySchema(BaseModel):
    revenue: float
    expenses: float
    profit: float
    bookings: int
    labels: list[str]
    monthly_revenue: list[float]
    monthly_expenses: list[float]
    monthly_profit: list[float]
    currency: str = "INR"
    year: int | None = None
