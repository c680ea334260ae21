# kyra_rides/policy/pricing.py
import math
import re
from collections.abc import Iterable
from datetime import time

from kyra_rides.app.protocols import PricingPolicy
from kyra_rides.domain.entities.fare import (
    FareBreakdown,
    FareComponents,
    FareConfig,
    FareSchedule,
    PerRideFare,
    SurgeWindow,
)
from kyra_rides.domain.entities.trip import Weekday, unique_days
from kyra_rides.domain.errors import InvalidDistance, InvalidTimeFormat

NORMAL_CONFIG = FareConfig(base_fare=50, per_km_rate=22.5, minimum_fare=50)
SURGE_MULTIPLIER = 1.5

# Surge tier is NORMAL_CONFIG scaled by SURGE_MULTIPLIER (75 / 33.75 / 75).
DEFAULT_SCHEDULE = FareSchedule(
    normal=NORMAL_CONFIG,
    surge_multiplier=SURGE_MULTIPLIER,
    surge_window=SurgeWindow(start_hour=22, end_hour=7),
)

_TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def parse_pickup_time(value: str) -> time:
    """Parse a rider-entered ``H:MM``/``HH:MM`` pickup time."""
    m = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if m is None:
        raise InvalidTimeFormat(value)
    return time(int(m.group(1)), int(m.group(2)))


def validate_distance(distance_km) -> float:
    try:
        d = float(distance_km)
    except (TypeError, ValueError):
        raise InvalidDistance(distance_km) from None
    if not math.isfinite(d) or d < 0:
        raise InvalidDistance(distance_km)
    return d


def round_half_up(x: float) -> int:
    # money rounding: 112.5 -> 113, never banker's rounding
    return int(math.floor(x + 0.5))


def _hour_of(time_of_day: time | int) -> int:
    if isinstance(time_of_day, time):
        return time_of_day.hour
    if isinstance(time_of_day, int) and not isinstance(time_of_day, bool) and 0 <= time_of_day <= 23:
        return time_of_day
    raise InvalidTimeFormat(time_of_day)


class FareEngine(PricingPolicy):
    """Prices one subscription week from distance, pickup time and ride days.

    Pure: no clock, no I/O. Inputs are trusted; run ``validate_distance`` and
    ``parse_pickup_time`` at the boundary first.
    """

    def __init__(self, schedule: FareSchedule = DEFAULT_SCHEDULE):
        self.schedule = schedule

    def is_surge_time(self, time_of_day: time | int) -> bool:
        return self.schedule.surge_window.contains(_hour_of(time_of_day))

    def calculate_per_ride_fare(self, distance_km: float, time_of_day: time | int) -> PerRideFare:
        is_surge = self.is_surge_time(time_of_day)
        config = self.schedule.surge if is_surge else self.schedule.normal
        fare = max(distance_km * config.per_km_rate, config.minimum_fare)
        return PerRideFare(fare=round_half_up(fare), is_surge=is_surge, config=config)

    def calculate_fare(
        self,
        distance_km: float,
        time_of_day: time | int,
        selected_days: Iterable[Weekday | str],
    ) -> FareBreakdown:
        per_ride = self.calculate_per_ride_fare(distance_km, time_of_day)
        n_days = len(unique_days(selected_days))
        return FareBreakdown(
            distance_km=distance_km,
            is_surge_pricing=per_ride.is_surge,
            per_ride_fare=per_ride.fare,
            number_of_days=n_days,
            total_weekly_fare=per_ride.fare * n_days,
            breakdown=FareComponents(
                base_fare=per_ride.config.base_fare,
                distance_fare=distance_km * per_ride.config.per_km_rate,
                surge_multiplier=self.schedule.surge_multiplier if per_ride.is_surge else 1,
            ),
        )

    def fare(self, trip) -> FareBreakdown:
        return self.calculate_fare(trip.distance_km, trip.pickup_time, trip.selected_days)


_default_engine = FareEngine()


def is_surge_time(time_of_day: time | int) -> bool:
    return _default_engine.is_surge_time(time_of_day)


def calculate_per_ride_fare(distance_km: float, time_of_day: time | int) -> PerRideFare:
    return _default_engine.calculate_per_ride_fare(distance_km, time_of_day)


def calculate_fare(
    distance_km: float, time_of_day: time | int, selected_days: Iterable[Weekday | str]
) -> FareBreakdown:
    return _default_engine.calculate_fare(distance_km, time_of_day, selected_days)


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567 (last three, then pairs)
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join([*groups, tail])


def format_currency(amount: float) -> str:
    """Rupee display string, e.g. ``₹1,00,000`` or ``₹67.5``.

    Display only. The output is not meant to be parsed back, and
    ``parse(format_currency(x)) == round(x)`` does not hold in general.
    """
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.3f}".rstrip("0").rstrip(".")
    whole, _, frac = text.partition(".")
    grouped = _group_indian(whole)
    return f"₹{sign}{grouped}.{frac}" if frac else f"₹{sign}{grouped}"
