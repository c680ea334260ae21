# domain/entities/booking.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from kyra_rides.domain.entities.fare import FareBreakdown
from kyra_rides.domain.entities.geography import Place
from kyra_rides.domain.entities.trip import Payer, TripRequest, format_days, in_display_order


@dataclass(frozen=True)
class CutoffCountdown:
    days: int
    hours: int
    minutes: int


@dataclass(frozen=True)
class BookingWindowState:
    start_date: date  # always a Monday
    is_next_week: bool  # upcoming Monday skipped because the cutoff passed
    time_until_cutoff: CutoffCountdown | None  # None once past cutoff

    def to_payload(self) -> dict:
        c = self.time_until_cutoff
        return {
            "startDate": self.start_date.isoformat(),
            "isNextWeek": self.is_next_week,
            "timeUntilCutoff": None
            if c is None
            else {"days": c.days, "hours": c.hours, "minutes": c.minutes},
        }


@dataclass(frozen=True)
class BookingProposal:
    payer: Payer
    pickup: Place
    drop: Place
    trip: TripRequest
    fare: FareBreakdown
    window: BookingWindowState
    quoted_at: datetime


@dataclass(frozen=True)
class BookingRecord:
    proposal: BookingProposal
    payment_id: str
    created_at: datetime

    def to_payload(self) -> dict:
        """Row handed to the persistence/notification sink."""
        p = self.proposal
        return {
            "customerName": p.payer.name,
            "phone": p.payer.phone,
            "pickupAddress": p.pickup.address,
            "dropAddress": p.drop.address,
            "distanceKm": p.fare.distance_km,
            "selectedDays": [d.value for d in in_display_order(p.trip.selected_days)],
            "days": format_days(p.trip.selected_days),
            "pickupTime": p.trip.pickup_time.strftime("%H:%M"),
            "startDate": p.window.start_date.isoformat(),
            "perRideFare": p.fare.per_ride_fare,
            "totalAmount": p.fare.total_weekly_fare,
            "isSurgePricing": p.fare.is_surge_pricing,
            "paymentId": self.payment_id,
            "timestamp": self.created_at.isoformat(),
        }
