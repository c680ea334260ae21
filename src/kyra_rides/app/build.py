# kyra_rides/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from kyra_rides.app.hooks import BookingHooks, NoopHooks
from kyra_rides.app.orchestrator import BookingOrchestrator
from kyra_rides.app.protocols import Clock, DistanceProvider, PaymentProvider
from kyra_rides.config.models import AppModel
from kyra_rides.io.booking_logging import BookingLogging  # JSON logs
from kyra_rides.io.recorder import Recorder
from kyra_rides.policy.booking_window import BookingWindowEngine
from kyra_rides.policy.pricing import FareEngine
from kyra_rides.runtime.clock import DEFAULT_TZ, SystemClock
from kyra_rides.runtime.policy_factory import make_booking_window, make_fare_engine
from kyra_rides.runtime.registries import make_distance_provider, make_recorder


@dataclass
class App:
    config: AppModel
    clock: Clock
    fare_engine: FareEngine
    booking_window: BookingWindowEngine
    distance: DistanceProvider
    recorder: Recorder
    hooks: BookingHooks
    orchestrator: BookingOrchestrator

    def close(self, timeout: float = 1.0) -> None:
        """Flush queued bookings and release sink files."""
        self.recorder.close(timeout)


def build(
    cfg: AppModel | Mapping | None = None,
    *,
    payment: PaymentProvider,
    clock: Clock | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = AppModel()
    else:
        model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    # 1) Clock: the only place the real wall clock is read
    clock = clock or SystemClock(tz=model.window.timezone or DEFAULT_TZ)

    # 2) Hooks
    hooks = (
        BookingLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 3) Engines & collaborators
    fare_engine = make_fare_engine(model.pricing)
    booking_window = make_booking_window(model.window)
    distance = make_distance_provider(model.distance)
    recorder = make_recorder(model.recorder)

    # 4) Orchestrator (inject deps explicitly)
    orchestrator = BookingOrchestrator(
        fare_engine=fare_engine,
        booking_window=booking_window,
        distance=distance,
        payment=payment,
        sink=recorder,
        clock=clock,
        hooks=hooks,
        min_days=model.rules.min_days,
    )

    return App(model, clock, fare_engine, booking_window, distance, recorder, hooks, orchestrator)
