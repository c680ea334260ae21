# main.py
import argparse
import json
import sys
from datetime import datetime

from kyra_rides.app.protocols import Clock
from kyra_rides.domain.entities.trip import Weekday, unique_days
from kyra_rides.domain.errors import BookingError
from kyra_rides.io.config import load_config
from kyra_rides.policy.booking_window import format_start_date, scheduled_dates
from kyra_rides.policy.pricing import format_currency, parse_pickup_time, validate_distance
from kyra_rides.runtime.clock import DEFAULT_TZ, SystemClock
from kyra_rides.runtime.policy_factory import make_booking_window, make_fare_engine


def quote(
    distance_km: float,
    pickup_time: str,
    days: list[str],
    *,
    config_path: str | None = None,
    clock: Clock | None = None,
) -> dict:
    cfg = load_config(config_path)
    clock = clock or SystemClock(tz=cfg.window.timezone or DEFAULT_TZ)

    selected = unique_days(days)
    fare = make_fare_engine(cfg.pricing).calculate_fare(
        validate_distance(distance_km), parse_pickup_time(pickup_time), selected
    )
    now: datetime = clock.now()
    window = make_booking_window(cfg.window).window_state(now)

    return {
        "fare": fare.to_payload(),
        "window": window.to_payload(),
        "display": {
            "perRide": format_currency(fare.per_ride_fare),
            "weekly": format_currency(fare.total_weekly_fare),
            "startDate": format_start_date(window.start_date),
            "rides": [
                f"{day.short} {d:%d %b}" for day, d in scheduled_dates(window.start_date, selected)
            ],
        },
    }


def _days(value: str) -> list[str]:
    try:
        return [Weekday(d.strip().lower()).value for d in value.split(",") if d.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="kyra-rides")
    sub = parser.add_subparsers(dest="command", required=True)
    q = sub.add_parser("quote", help="price a weekly subscription and show its start date")
    q.add_argument("--distance", type=float, required=True, help="trip distance in km")
    q.add_argument("--time", required=True, help="pickup time HH:MM")
    q.add_argument("--days", type=_days, required=True, help="e.g. monday,wednesday,friday")
    q.add_argument("--config", default=None, help="JSON config file")
    args = parser.parse_args(argv)

    try:
        out = quote(args.distance, args.time, args.days, config_path=args.config)
    except BookingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
