from datetime import date, datetime
from typing import Protocol, runtime_checkable

from kyra_rides.domain.entities.geography import Coord
from kyra_rides.domain.entities.trip import Payer


# ------------- Collaborators --------------------
@runtime_checkable
class DistanceProvider(Protocol):
    """
    Responsibilities:
      • Resolve the driving distance between two points.
      • Return None on any lookup failure (the caller decides what to tell the rider).
    Units: kilometres.
    """

    def distance_km(self, origin: Coord, dest: Coord) -> float | None: ...


@runtime_checkable
class PaymentProvider(Protocol):
    """
    Collect ``amount`` whole rupees from the payer and return the gateway payment id.
    Raises PaymentCancelled when the rider dismisses checkout, PaymentFailed otherwise.
    Only return once the payment is verified.
    """

    def charge(
        self,
        amount: int,
        payer: Payer,
        *,
        description: str = "",
        notes: dict[str, str] | None = None,
    ) -> str: ...


@runtime_checkable
class BookingSink(Protocol):
    """Persistence/notification boundary. Fire-and-forget from the orchestrator's view."""

    def write(self, record) -> None: ...


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...


# --------------- Policies -------------------------


@runtime_checkable
class PricingPolicy(Protocol):
    def fare(self, trip): ...


@runtime_checkable
class BookingWindowPolicy(Protocol):
    def window_state(self, now: datetime): ...
    def get_subscription_start_date(self, now: datetime) -> date: ...
