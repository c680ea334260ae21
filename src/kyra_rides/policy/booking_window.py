# kyra_rides/policy/booking_window.py
"""
Weekly booking window for subscriptions.

Subscriptions always start on a Monday. Bookings for the upcoming Monday
close on Saturday at 13:00 local time; from that instant (and all of
Sunday) the offered start date moves out one more week.

Day arithmetic here uses the Sunday-first index (0=Sun … 6=Sat) from
``Weekday.day_index``. Python's ``date.weekday()`` (0=Mon) is only read
through ``Weekday.from_date``.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from kyra_rides.app.protocols import BookingWindowPolicy
from kyra_rides.domain.entities.booking import BookingWindowState, CutoffCountdown
from kyra_rides.domain.entities.trip import Weekday, in_display_order
from kyra_rides.runtime.clock import resolve_tz, to_local

CUTOFF_DAY = Weekday.SATURDAY.day_index
CUTOFF_HOUR = 13
CUTOFF_MINUTE = 0
START_DAY = Weekday.MONDAY

DAY_S = 24 * 3600
HOUR_S = 3600
MIN_S = 60


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


class BookingWindowEngine(BookingWindowPolicy):
    def __init__(
        self,
        cutoff_hour: int = CUTOFF_HOUR,
        cutoff_minute: int = CUTOFF_MINUTE,
        tz: tzinfo | str | None = None,
    ):
        self.cutoff_hour = cutoff_hour
        self.cutoff_minute = cutoff_minute
        self.tz = resolve_tz(tz)

    def _local(self, now: datetime) -> datetime:
        return to_local(now, self.tz)

    # ------------- cutoff rule --------------------

    def check_if_past_cutoff(self, weekday_index: int, hour: int, minute: int) -> bool:
        """weekday_index is Sunday-first (0=Sun … 6=Sat)."""
        if weekday_index == Weekday.SUNDAY.day_index:
            return True
        if weekday_index == CUTOFF_DAY:
            # the cutoff minute itself is still open: 13:00 open, 13:01 closed
            return hour > self.cutoff_hour or (
                hour == self.cutoff_hour and minute > self.cutoff_minute
            )
        return False

    def is_next_week_booking(self, now: datetime) -> bool:
        local = self._local(now)
        day = Weekday.from_date(local.date())
        return self.check_if_past_cutoff(day.day_index, local.hour, local.minute)

    # ------------- start date --------------------

    def upcoming_monday(self, now: datetime) -> date:
        """Next Monday strictly after today (a week out when today is Monday)."""
        today = self._local(now).date()
        ahead = (START_DAY.day_index - Weekday.from_date(today).day_index) % 7 or 7
        return today + timedelta(days=ahead)

    def get_subscription_start_date(self, now: datetime) -> date:
        start = self.upcoming_monday(now)
        if self.is_next_week_booking(now):
            start += timedelta(days=7)
        return start

    def get_time_until_cutoff(self, now: datetime) -> CutoffCountdown | None:
        if self.is_next_week_booking(now):
            return None
        local = self._local(now)
        # same day when it is Saturday before the cutoff
        days_until = (CUTOFF_DAY - Weekday.from_date(local.date()).day_index) % 7
        cutoff = (local + timedelta(days=days_until)).replace(
            hour=self.cutoff_hour, minute=self.cutoff_minute, second=0, microsecond=0
        )
        # inside the open cutoff minute the difference is a few seconds negative
        remaining = max(0, int((cutoff - local).total_seconds()))
        return CutoffCountdown(
            days=remaining // DAY_S,
            hours=(remaining % DAY_S) // HOUR_S,
            minutes=(remaining % HOUR_S) // MIN_S,
        )

    def window_state(self, now: datetime) -> BookingWindowState:
        return BookingWindowState(
            start_date=self.get_subscription_start_date(now),
            is_next_week=self.is_next_week_booking(now),
            time_until_cutoff=self.get_time_until_cutoff(now),
        )


def format_start_date(d: date) -> str:
    """e.g. 'Monday, January 6th, 2025'."""
    return f"{d:%A}, {d:%B} {_ordinal(d.day)}, {d.year}"


def scheduled_dates(start: date, days: Iterable[Weekday]) -> list[tuple[Weekday, date]]:
    """Calendar date of each ride day in the week beginning at ``start`` (a Monday)."""
    out = []
    for day in in_display_order(days):
        offset = (day.day_index - START_DAY.day_index) % 7
        out.append((day, start + timedelta(days=offset)))
    return out


_default_window = BookingWindowEngine()


def check_if_past_cutoff(weekday_index: int, hour: int, minute: int) -> bool:
    return _default_window.check_if_past_cutoff(weekday_index, hour, minute)


def get_subscription_start_date(now: datetime) -> date:
    return _default_window.get_subscription_start_date(now)


def is_next_week_booking(now: datetime) -> bool:
    return _default_window.is_next_week_booking(now)


def get_time_until_cutoff(now: datetime) -> CutoffCountdown | None:
    return _default_window.get_time_until_cutoff(now)
