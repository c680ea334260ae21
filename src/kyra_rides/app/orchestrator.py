# kyra_rides/app/orchestrator.py
from collections.abc import Mapping

from kyra_rides.app.events import (
    BookingRejected,
    BookingSaved,
    PaymentConfirmed,
    QuoteIssued,
    SinkFailed,
)
from kyra_rides.app.hooks import BookingHooks, NoopHooks
from kyra_rides.app.protocols import BookingSink, Clock, DistanceProvider, PaymentProvider
from kyra_rides.domain.entities.booking import BookingProposal, BookingRecord
from kyra_rides.domain.entities.trip import TripRequest, format_days, unique_days
from kyra_rides.domain.errors import (
    BookingError,
    ClockUnavailable,
    DistanceUnavailable,
    InsufficientDays,
)
from kyra_rides.domain.forms import BookingRequest
from kyra_rides.policy.booking_window import BookingWindowEngine, format_start_date
from kyra_rides.policy.pricing import FareEngine, parse_pickup_time, validate_distance

MIN_DAYS_PER_WEEK = 2


class BookingOrchestrator:
    """Quote -> pay -> persist for one subscription week.

    Validation always runs before any collaborator is called. Once the
    payment provider has returned a payment id the booking stands: sink
    failures are reported through hooks and never raised.
    """

    def __init__(
        self,
        fare_engine: FareEngine,
        booking_window: BookingWindowEngine,
        distance: DistanceProvider,
        payment: PaymentProvider,
        sink: BookingSink,
        clock: Clock,
        hooks: BookingHooks | None = None,
        min_days: int = MIN_DAYS_PER_WEEK,
    ):
        self.fare_engine = fare_engine
        self.booking_window = booking_window
        self.distance = distance
        self.payment = payment
        self.sink = sink
        self.clock = clock
        self.hooks = hooks or NoopHooks()
        self.min_days = min_days

    def _now(self):
        try:
            return self.clock.now()
        except ClockUnavailable:
            raise
        except Exception as exc:
            raise ClockUnavailable(str(exc)) from exc

    def _reject(self, request: BookingRequest, exc: BookingError):
        self.hooks.rejected(
            BookingRejected(
                at=self._safe_now(),
                phone=request.phone,
                reason=type(exc).__name__,
                detail=str(exc),
            )
        )

    def _safe_now(self):
        try:
            return self._now()
        except ClockUnavailable:
            return None

    # ------------ quote --------------

    def quote(self, request: BookingRequest | Mapping) -> BookingProposal:
        if not isinstance(request, BookingRequest):
            request = BookingRequest.model_validate(request)
        try:
            return self._quote(request)
        except BookingError as exc:
            self._reject(request, exc)
            raise

    def _quote(self, request: BookingRequest) -> BookingProposal:
        days = unique_days(request.selected_days)
        if len(days) < self.min_days:
            raise InsufficientDays(len(days), self.min_days)
        pickup_time = parse_pickup_time(request.pickup_time)
        pickup, drop = request.pickup.to_place(), request.drop.to_place()

        km = self.distance.distance_km(pickup.coord, drop.coord)
        if km is None:
            raise DistanceUnavailable("could not resolve a route between pickup and drop")
        km = validate_distance(km)

        now = self._now()
        trip = TripRequest(distance_km=km, pickup_time=pickup_time, selected_days=days)
        fare = self.fare_engine.fare(trip)
        window = self.booking_window.window_state(now)

        self.hooks.quote_issued(
            QuoteIssued(
                at=now,
                phone=request.phone,
                distance_km=km,
                per_ride_fare=fare.per_ride_fare,
                total_weekly_fare=fare.total_weekly_fare,
                is_surge=fare.is_surge_pricing,
                start_date=window.start_date,
                is_next_week=window.is_next_week,
            )
        )
        return BookingProposal(
            payer=request.payer(),
            pickup=pickup,
            drop=drop,
            trip=trip,
            fare=fare,
            window=window,
            quoted_at=now,
        )

    # ------------ book --------------

    def book(self, request: BookingRequest | Mapping) -> BookingRecord:
        proposal = self.quote(request)
        return self.confirm(proposal)

    def confirm(self, proposal: BookingProposal) -> BookingRecord:
        """Charge for a quoted proposal and hand the record to the sink."""
        amount = proposal.fare.total_weekly_fare
        description = (
            f"Weekly rides ({format_days(proposal.trip.selected_days)}) "
            f"from {format_start_date(proposal.window.start_date)}"
        )
        notes = {
            "pickup": proposal.pickup.address,
            "drop": proposal.drop.address,
            "startDate": proposal.window.start_date.isoformat(),
        }
        # PaymentCancelled / PaymentFailed propagate; nothing is persisted
        payment_id = self.payment.charge(
            amount, proposal.payer, description=description, notes=notes
        )
        now = self._safe_now() or proposal.quoted_at
        self.hooks.payment_confirmed(
            PaymentConfirmed(
                at=now, phone=proposal.payer.phone, payment_id=payment_id, amount=amount
            )
        )

        record = BookingRecord(proposal=proposal, payment_id=payment_id, created_at=now)
        try:
            self.sink.write(record)
        except Exception as exc:
            self.hooks.sink_error(
                SinkFailed(at=now, phone=proposal.payer.phone, payment_id=payment_id, error=str(exc))
            )
        else:
            self.hooks.booking_saved(
                BookingSaved(at=now, phone=proposal.payer.phone, payment_id=payment_id)
            )
        return record
