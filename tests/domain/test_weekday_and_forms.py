from datetime import date

import pytest
from pydantic import ValidationError

from kyra_rides.domain.entities.trip import DISPLAY_ORDER, Weekday, format_days, unique_days
from kyra_rides.domain.forms import BookingRequest, normalize_phone


def test_arithmetic_index_is_sunday_first():
    assert Weekday.SUNDAY.day_index == 0
    assert Weekday.MONDAY.day_index == 1
    assert Weekday.SATURDAY.day_index == 6
    assert Weekday.from_day_index(7) is Weekday.SUNDAY


def test_display_order_is_monday_first():
    assert DISPLAY_ORDER[0] is Weekday.MONDAY
    assert DISPLAY_ORDER[-1] is Weekday.SUNDAY
    assert set(DISPLAY_ORDER) == set(Weekday)


def test_from_date_bridges_python_weekday():
    assert Weekday.from_date(date(2025, 1, 1)) is Weekday.WEDNESDAY  # weekday() == 2
    assert Weekday.from_date(date(2025, 1, 5)) is Weekday.SUNDAY  # weekday() == 6
    assert Weekday.from_date(date(2025, 1, 6)) is Weekday.MONDAY


def test_day_labels():
    assert format_days(unique_days(["sunday", "tuesday", "monday"])) == "Monday, Tuesday, Sunday"
    assert Weekday.THURSDAY.short == "Thu"


@pytest.mark.parametrize(
    "raw, digits",
    [("9876543210", "9876543210"), ("+91 98765 43210", "9876543210"), ("098765-43210", "9876543210")],
)
def test_normalize_phone(raw, digits):
    assert normalize_phone(raw) == digits


def _form(**kw):
    base = {
        "name": "  Divya  ",
        "phone": "7000000000",
        "pickup": {"address": "A", "place_id": "a", "lat": 12.9, "lng": 77.6},
        "drop": {"address": "B", "place_id": "b", "lat": 13.0, "lng": 77.7},
        "pickup_time": "09:00",
        "selected_days": ["monday"],
    }
    base.update(kw)
    return base


def test_booking_request_cleans_input():
    req = BookingRequest.model_validate(_form())
    assert req.name == "Divya"
    assert req.selected_days == [Weekday.MONDAY]
    assert req.pickup.to_place().coord.lat == 12.9
    assert req.payer().phone == "7000000000"


@pytest.mark.parametrize(
    "kw",
    [
        {"phone": "5000000000"},  # must start 6-9
        {"name": "x" * 101},
        {"pickup": {"address": "", "place_id": "a", "lat": 1, "lng": 1}},
        {"drop": {"address": "B", "place_id": "b", "lat": 91, "lng": 1}},
        {"extra": True},
    ],
)
def test_booking_request_rejects(kw):
    with pytest.raises(ValidationError):
        BookingRequest.model_validate(_form(**kw))
