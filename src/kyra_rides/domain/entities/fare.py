# domain/entities/fare.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FareConfig:
    base_fare: float  # display only, never added into the fare
    per_km_rate: float
    minimum_fare: float

    def scaled(self, m: float) -> FareConfig:
        return FareConfig(
            base_fare=self.base_fare * m,
            per_km_rate=self.per_km_rate * m,
            minimum_fare=self.minimum_fare * m,
        )


@dataclass(frozen=True)
class SurgeWindow:
    """Nightly surge hours [start_hour, end_hour), wrapping midnight."""

    start_hour: int = 22
    end_hour: int = 7

    def contains(self, hour: int) -> bool:
        if self.start_hour <= self.end_hour:
            return self.start_hour <= hour < self.end_hour
        return hour >= self.start_hour or hour < self.end_hour


@dataclass(frozen=True)
class FareSchedule:
    normal: FareConfig
    surge_multiplier: float = 1.5
    surge_window: SurgeWindow = SurgeWindow()

    @property
    def surge(self) -> FareConfig:
        return self.normal.scaled(self.surge_multiplier)


@dataclass(frozen=True)
class PerRideFare:
    fare: int
    is_surge: bool
    config: FareConfig


@dataclass(frozen=True)
class FareComponents:
    base_fare: float
    distance_fare: float  # unrounded distance * rate
    surge_multiplier: float


@dataclass(frozen=True)
class FareBreakdown:
    distance_km: float
    is_surge_pricing: bool
    per_ride_fare: int
    number_of_days: int
    total_weekly_fare: int
    breakdown: FareComponents

    def to_payload(self) -> dict:
        return {
            "distanceKm": self.distance_km,
            "isSurgePricing": self.is_surge_pricing,
            "perRideFare": self.per_ride_fare,
            "numberOfDays": self.number_of_days,
            "totalWeeklyFare": self.total_weekly_fare,
            "breakdown": {
                "baseFare": self.breakdown.base_fare,
                "distanceFare": self.breakdown.distance_fare,
                "surgeMultiplier": self.breakdown.surge_multiplier,
            },
        }
