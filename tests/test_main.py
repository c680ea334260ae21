import json

from kyra_rides.runtime.clock import FixedClock
from main import main, quote


def test_quote_scenario():
    out = quote(10, "14:30", ["monday", "wednesday", "friday"], clock=FixedClock.local(2025, 1, 1, 10, 0))
    assert out["fare"]["totalWeeklyFare"] == 675
    assert out["window"]["startDate"] == "2025-01-06"
    assert out["window"]["timeUntilCutoff"] == {"days": 3, "hours": 3, "minutes": 0}
    assert out["display"]["weekly"] == "₹675"
    assert out["display"]["startDate"] == "Monday, January 6th, 2025"
    assert out["display"]["rides"] == ["Mon 06 Jan", "Wed 08 Jan", "Fri 10 Jan"]


def test_cli_prints_json(capsys):
    assert main(["quote", "--distance", "2", "--time", "23:00", "--days", "Monday,Tuesday"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["fare"]["perRideFare"] == 75
    assert out["fare"]["isSurgePricing"] is True


def test_cli_reports_bad_time(capsys):
    assert main(["quote", "--distance", "2", "--time", "7pm", "--days", "monday"]) == 2
    assert "pickup time" in capsys.readouterr().err
