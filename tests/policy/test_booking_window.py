from datetime import UTC, date, datetime

import pytest

from kyra_rides.domain.entities.booking import CutoffCountdown
from kyra_rides.domain.entities.trip import Weekday
from kyra_rides.policy.booking_window import (
    BookingWindowEngine,
    check_if_past_cutoff,
    format_start_date,
    get_subscription_start_date,
    get_time_until_cutoff,
    is_next_week_booking,
    scheduled_dates,
)

# Week of 2025-01-01 (Wednesday):
#   Wed 01, Thu 02, Fri 03, Sat 04, Sun 05, Mon 06, ... Mon 13
WED = (2025, 1, 1)
FRI = (2025, 1, 3)
SAT = (2025, 1, 4)
SUN = (2025, 1, 5)
MON = (2025, 1, 6)

SUNDAY, WEDNESDAY, SATURDAY = 0, 3, 6


# ------------------ cutoff rule ------------------


@pytest.mark.parametrize(
    "day, hour, minute, expected",
    [
        (SUNDAY, 0, 0, True),
        (SUNDAY, 23, 59, True),
        (SATURDAY, 12, 59, False),
        (SATURDAY, 13, 0, False),
        (SATURDAY, 13, 1, True),
        (SATURDAY, 14, 0, True),
        (WEDNESDAY, 23, 59, False),
        (1, 0, 0, False),
        (5, 13, 30, False),
    ],
)
def test_check_if_past_cutoff(day, hour, minute, expected):
    assert check_if_past_cutoff(day, hour, minute) is expected


def test_cutoff_minute_is_configurable():
    engine = BookingWindowEngine(cutoff_hour=11, cutoff_minute=30)
    assert engine.check_if_past_cutoff(SATURDAY, 11, 30) is False
    assert engine.check_if_past_cutoff(SATURDAY, 11, 31) is True
    assert engine.check_if_past_cutoff(SATURDAY, 12, 0) is True


# ------------------ start date ------------------


def test_midweek_starts_next_monday():
    now = datetime(*WED, 10, 0)
    assert get_subscription_start_date(now) == date(2025, 1, 6)  # 5 days later
    assert is_next_week_booking(now) is False


def test_saturday_before_and_after_cutoff():
    assert get_subscription_start_date(datetime(*SAT, 12, 59)) == date(2025, 1, 6)
    assert get_subscription_start_date(datetime(*SAT, 13, 0, 59)) == date(2025, 1, 6)
    # 13:01 skips a week: Monday 9 days later
    assert get_subscription_start_date(datetime(*SAT, 13, 1)) == date(2025, 1, 13)


def test_sunday_skips_to_monday_after_next():
    assert get_subscription_start_date(datetime(*SUN, 8, 0)) == date(2025, 1, 13)
    assert is_next_week_booking(datetime(*SUN, 8, 0)) is True


def test_monday_never_offers_today():
    assert get_subscription_start_date(datetime(*MON, 0, 1)) == date(2025, 1, 13)


def test_start_date_is_always_a_monday():
    for day in range(1, 15):
        for hour in (0, 12, 13, 23):
            start = get_subscription_start_date(datetime(2025, 1, day, hour, 1))
            assert start.weekday() == 0
            assert start > date(2025, 1, day)


def test_aware_now_is_read_in_configured_zone():
    engine = BookingWindowEngine(tz="Asia/Kolkata")
    # 07:35 UTC == 13:05 IST on Saturday -> past cutoff
    now = datetime(*SAT, 7, 35, tzinfo=UTC)
    assert engine.is_next_week_booking(now) is True
    assert engine.get_subscription_start_date(now) == date(2025, 1, 13)
    # the same instant read as UTC wall time is still open
    assert BookingWindowEngine(tz="UTC").is_next_week_booking(now) is False


# ------------------ countdown ------------------


def test_time_until_cutoff_midweek():
    assert get_time_until_cutoff(datetime(*WED, 10, 0)) == CutoffCountdown(3, 3, 0)


def test_time_until_cutoff_floors_partial_minutes():
    assert get_time_until_cutoff(datetime(*FRI, 12, 15, 30)) == CutoffCountdown(1, 0, 44)


def test_time_until_cutoff_same_saturday():
    assert get_time_until_cutoff(datetime(*SAT, 9, 30)) == CutoffCountdown(0, 3, 30)


def test_time_until_cutoff_inside_open_cutoff_minute_is_zero():
    assert get_time_until_cutoff(datetime(*SAT, 13, 0, 30)) == CutoffCountdown(0, 0, 0)


@pytest.mark.parametrize("now", [datetime(*SAT, 13, 1), datetime(*SUN, 9, 0)])
def test_time_until_cutoff_is_none_once_closed(now):
    assert get_time_until_cutoff(now) is None


def test_window_state_bundles_everything():
    state = BookingWindowEngine().window_state(datetime(*SAT, 18, 0))
    assert state.start_date == date(2025, 1, 13)
    assert state.is_next_week is True
    assert state.time_until_cutoff is None
    assert state.to_payload() == {
        "startDate": "2025-01-13",
        "isNextWeek": True,
        "timeUntilCutoff": None,
    }


def test_same_now_same_answer():
    now = datetime(*FRI, 22, 10)
    engine = BookingWindowEngine()
    assert engine.window_state(now) == engine.window_state(now)


# ------------------ display helpers ------------------


@pytest.mark.parametrize(
    "d, text",
    [
        (date(2025, 1, 6), "Monday, January 6th, 2025"),
        (date(2025, 9, 1), "Monday, September 1st, 2025"),
        (date(2025, 6, 2), "Monday, June 2nd, 2025"),
        (date(2025, 3, 3), "Monday, March 3rd, 2025"),
        (date(2025, 8, 11), "Monday, August 11th, 2025"),
        (date(2025, 6, 23), "Monday, June 23rd, 2025"),
    ],
)
def test_format_start_date(d, text):
    assert format_start_date(d) == text


def test_scheduled_dates_follow_display_order():
    got = scheduled_dates(date(2025, 1, 6), [Weekday.SUNDAY, Weekday.WEDNESDAY, Weekday.MONDAY])
    assert got == [
        (Weekday.MONDAY, date(2025, 1, 6)),
        (Weekday.WEDNESDAY, date(2025, 1, 8)),
        (Weekday.SUNDAY, date(2025, 1, 12)),
    ]
