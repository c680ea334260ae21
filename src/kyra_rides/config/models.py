from typing import Annotated, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- PRICING ---------------------


class FareTierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    base_fare: float = 50.0
    per_km_rate: float = 22.5
    minimum_fare: float = 50.0

    @field_validator("base_fare", "per_km_rate", "minimum_fare")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class PricingSurgeTieredModel(BaseModel):
    """Normal tier plus a nightly surge tier derived as normal * surge_multiplier."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["surge_tiered"] = "surge_tiered"
    normal: FareTierModel = Field(default_factory=FareTierModel)
    surge_multiplier: float = Field(default=1.5, ge=1.0)
    surge_start_hour: int = Field(default=22, ge=0, le=23)
    surge_end_hour: int = Field(default=7, ge=0, le=23)


PricingPolicyUnion = Annotated[PricingSurgeTieredModel, Field(discriminator="kind")]


# ----------------- BOOKING WINDOW ---------------------


class BookingWindowModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    cutoff_hour: int = Field(default=13, ge=0, le=23)  # Saturday
    cutoff_minute: int = Field(default=0, ge=0, le=59)
    timezone: str | None = "Asia/Kolkata"

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v: str | None) -> str | None:
        if v is None:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown IANA time zone {v!r}") from None
        return v


class RulesModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    min_days: int = Field(default=2, ge=1, le=7)


# ----------------- DISTANCE PROVIDERS ---------------------


class DistanceHaversineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["haversine"] = "haversine"
    road_factor: float = Field(default=1.0, ge=1.0)


class DistanceFixedModel(BaseModel):
    """Test stub with a fixed distance."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["fixed"] = "fixed"
    km: float = Field(default=5.0, ge=0.0)


DistanceUnion = Annotated[
    DistanceHaversineModel | DistanceFixedModel, Field(discriminator="kind")
]


# ------------------ SINKS -----------------------------


class SinkJsonlModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["jsonl"] = "jsonl"
    path: str | None = None  # None => stdout


class SinkMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


SinkUnion = Annotated[SinkJsonlModel | SinkMemoryModel, Field(discriminator="kind")]


class RecorderModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sinks: list[SinkUnion] = Field(default_factory=lambda: [SinkJsonlModel()])
    non_blocking: bool = False
    queue_size: int = Field(default=1000, ge=1)

    @model_validator(mode="after")
    def _at_least_one(self):
        if not self.sinks:
            raise ValueError("recorder needs at least one sink")
        return self


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "kyra-rides"
    run_id: str = "local"
    log: LogModel = LogModel()
    pricing: PricingPolicyUnion = Field(default_factory=PricingSurgeTieredModel)
    window: BookingWindowModel = BookingWindowModel()
    rules: RulesModel = RulesModel()
    distance: DistanceUnion = Field(default_factory=DistanceHaversineModel)
    recorder: RecorderModel = Field(default_factory=RecorderModel)
