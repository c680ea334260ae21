# runtime/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from kyra_rides.domain.errors import ClockUnavailable

DEFAULT_TZ = "Asia/Kolkata"


def resolve_tz(tz: tzinfo | str | None) -> tzinfo | None:
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ClockUnavailable(f"unknown time zone {tz!r}") from exc


def to_local(dt: datetime, tz: tzinfo | str | None) -> datetime:
    """Return dt as wall time in tz (tzinfo or IANA string).
    Naive datetimes are taken to already be local wall time and pass through."""
    zone = resolve_tz(tz)
    if zone is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(zone)


@dataclass(frozen=True)
class SystemClock:
    """The real wall clock, read only at the call site."""

    tz: str = DEFAULT_TZ

    def now(self) -> datetime:
        try:
            return datetime.now(UTC).astimezone(resolve_tz(self.tz))
        except (OSError, OverflowError) as exc:
            raise ClockUnavailable(str(exc)) from exc


@dataclass(frozen=True)
class FixedClock:
    at: datetime

    @classmethod
    def local(cls, y: int, m: int, d: int, hh=0, mm=0, ss=0) -> FixedClock:
        return cls(datetime(y, m, d, hh, mm, ss))

    def now(self) -> datetime:
        return self.at
