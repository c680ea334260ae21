from kyra_rides.config.models import BookingWindowModel, PricingPolicyUnion, PricingSurgeTieredModel
from kyra_rides.domain.entities.fare import FareConfig, FareSchedule, SurgeWindow
from kyra_rides.policy.booking_window import BookingWindowEngine
from kyra_rides.policy.pricing import FareEngine


def make_fare_engine(cfg: PricingPolicyUnion) -> FareEngine:
    if isinstance(cfg, PricingSurgeTieredModel):
        schedule = FareSchedule(
            normal=FareConfig(
                base_fare=cfg.normal.base_fare,
                per_km_rate=cfg.normal.per_km_rate,
                minimum_fare=cfg.normal.minimum_fare,
            ),
            surge_multiplier=cfg.surge_multiplier,
            surge_window=SurgeWindow(start_hour=cfg.surge_start_hour, end_hour=cfg.surge_end_hour),
        )
        return FareEngine(schedule)
    else:
        raise TypeError(cfg)


def make_booking_window(cfg: BookingWindowModel) -> BookingWindowEngine:
    return BookingWindowEngine(
        cutoff_hour=cfg.cutoff_hour,
        cutoff_minute=cfg.cutoff_minute,
        tz=cfg.timezone,
    )
