# kyra_rides/domain/errors.py


class BookingError(Exception):
    """Base for every rejection surfaced to the rider as a message."""


# --------------- input validation -------------------------


class InvalidDistance(BookingError, ValueError):
    def __init__(self, distance_km):
        self.distance_km = distance_km
        super().__init__(f"distance must be a finite number >= 0, got {distance_km!r}")


class InvalidTimeFormat(BookingError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"pickup time must be HH:MM between 00:00 and 23:59, got {value!r}")


class InsufficientDays(BookingError, ValueError):
    def __init__(self, selected: int, required: int):
        self.selected, self.required = selected, required
        super().__init__(f"select at least {required} days per week, got {selected}")


# --------------- environment / collaborators -----------------


class ClockUnavailable(BookingError, RuntimeError):
    pass


class DistanceUnavailable(BookingError, RuntimeError):
    pass


class PaymentCancelled(BookingError):
    """Rider dismissed the checkout before paying."""


class PaymentFailed(BookingError):
    pass
