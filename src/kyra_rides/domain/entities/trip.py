# domain/entities/trip.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, time
from enum import Enum


class Weekday(str, Enum):
    """Scheduled ride day. The value is the wire/storage name."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @property
    def day_index(self) -> int:
        """Arithmetic index, 0=Sun … 6=Sat. Not the display position."""
        return _DAY_INDEX[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def short(self) -> str:
        return self.label[:3]

    @classmethod
    def from_day_index(cls, idx: int) -> Weekday:
        return _BY_DAY_INDEX[idx % 7]

    @classmethod
    def from_date(cls, d: date) -> Weekday:
        # date.weekday() is 0=Mon … 6=Sun
        return cls.from_day_index(d.weekday() + 1)


_DAY_INDEX = {day: i for i, day in enumerate(Weekday)}
_BY_DAY_INDEX = {i: day for day, i in _DAY_INDEX.items()}

# Every rider-facing list is Monday-first.
DISPLAY_ORDER: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)


def unique_days(days: Iterable[Weekday | str]) -> frozenset[Weekday]:
    return frozenset(Weekday(d) for d in days)


def in_display_order(days: Iterable[Weekday]) -> list[Weekday]:
    chosen = set(days)
    return [d for d in DISPLAY_ORDER if d in chosen]


def format_days(days: Iterable[Weekday]) -> str:
    return ", ".join(d.label for d in in_display_order(days))


@dataclass(frozen=True)
class TripRequest:
    distance_km: float
    pickup_time: time  # same pickup time every scheduled day
    selected_days: frozenset[Weekday]

    @classmethod
    def of(cls, distance_km: float, pickup_time: time, days: Iterable[Weekday | str]) -> TripRequest:
        return cls(distance_km, pickup_time, unique_days(days))


@dataclass(frozen=True)
class Payer:
    name: str
    phone: str  # 10 national digits
