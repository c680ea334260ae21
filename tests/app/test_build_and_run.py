# tests/app/test_build_and_run.py
from datetime import date

from kyra_rides.app.build import build
from kyra_rides.io.recorder import MemorySink
from kyra_rides.runtime.clock import FixedClock


class _Payment:
    def charge(self, amount, payer, *, description="", notes=None):
        return f"pay_{amount}"


def test_build_runs():
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "pricing": {"kind": "surge_tiered", "surge_multiplier": 1.5},
        "window": {"timezone": "Asia/Kolkata"},
        "distance": {"kind": "fixed", "km": 10.0},
        "recorder": {"sinks": [{"kind": "memory"}]},
    }
    app = build(cfg, payment=_Payment(), clock=FixedClock.local(2025, 1, 1, 9, 0), use_logging=False)
    record = app.orchestrator.book(
        {
            "name": "Meera",
            "phone": "9876543210",
            "pickup": {"address": "A", "place_id": "a", "lat": 12.97, "lng": 77.59},
            "drop": {"address": "B", "place_id": "b", "lat": 12.93, "lng": 77.62},
            "pickup_time": "08:15",
            "selected_days": ["tuesday", "thursday"],
        }
    )
    assert record.payment_id == "pay_450"
    assert record.proposal.window.start_date == date(2025, 1, 6)
    (sink,) = app.recorder.sinks
    assert isinstance(sink, MemorySink)
    assert sink.records == [record]


def test_build_defaults():
    app = build(payment=_Payment(), use_logging=False)
    assert app.orchestrator.min_days == 2
    assert app.fare_engine.schedule.surge.per_km_rate == 33.75
    assert app.booking_window.cutoff_hour == 13
    assert app.clock.now().tzinfo is not None


def test_close_flushes_non_blocking_recorder(tmp_path):
    path = tmp_path / "bookings.jsonl"
    cfg = {
        "distance": {"kind": "fixed", "km": 4.0},
        "recorder": {"sinks": [{"kind": "jsonl", "path": str(path)}], "non_blocking": True},
    }
    app = build(cfg, payment=_Payment(), clock=FixedClock.local(2025, 1, 1, 9, 0), use_logging=False)
    record = app.orchestrator.book(
        {
            "name": "Meera",
            "phone": "9876543210",
            "pickup": {"address": "A", "place_id": "a", "lat": 12.97, "lng": 77.59},
            "drop": {"address": "B", "place_id": "b", "lat": 12.93, "lng": 77.62},
            "pickup_time": "08:15",
            "selected_days": ["monday", "friday"],
        }
    )
    app.close()
    (sink,) = app.recorder.sinks
    assert sink.sink.fp.closed
    assert record.payment_id in path.read_text()
