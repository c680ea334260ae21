# app/events.py
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class BookingEvent:
    at: datetime | None  # wall time the step happened
    phone: str


# Quote
@dataclass(frozen=True)
class QuoteIssued(BookingEvent):
    distance_km: float
    per_ride_fare: int
    total_weekly_fare: int
    is_surge: bool
    start_date: date
    is_next_week: bool


@dataclass(frozen=True)
class BookingRejected(BookingEvent):
    reason: str  # exception class name
    detail: str


# Payment & persistence
@dataclass(frozen=True)
class PaymentConfirmed(BookingEvent):
    payment_id: str
    amount: int


@dataclass(frozen=True)
class BookingSaved(BookingEvent):
    payment_id: str


@dataclass(frozen=True)
class SinkFailed(BookingEvent):
    payment_id: str
    error: str
