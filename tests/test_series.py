"""Tests for the gap-filled chart series and line chart datasets."""

from datetime import date, datetime, timedelta, timezone

import pandas as pd

from prepaylogic import Reading
from prepaylogic.analytics import series
from prepaylogic.analytics.config import EngineConfig


def _keys_between(start: date, end: date) -> list[str]:
    return [d.strftime("%Y-%m-%d") for d in pd.date_range(start, end, freq="D")]


def test_chart_series_fills_every_day(make_readings):
    # fall, then a top-up somewhere between day 4 and day 7
    readings = make_readings([(100, 0), (60, 4), (90, 7), (85, 8)])
    out = series.chart_series(readings)
    assert list(out) == _keys_between(date(2025, 3, 1), date(2025, 3, 9))
    assert out == {
        "2025-03-01": 100.0,
        "2025-03-02": 90.0,
        "2025-03-03": 80.0,
        "2025-03-04": 70.0,
        "2025-03-05": 60.0,
        "2025-03-06": 60.0,  # carried, not a fabricated slope
        "2025-03-07": 60.0,
        "2025-03-08": 90.0,
        "2025-03-09": 85.0,
    }


def test_chart_series_rounds_interpolated_values(make_readings):
    out = series.chart_series(make_readings([(100, 0), (90, 3)]))
    assert out == {
        "2025-03-01": 100.0,
        "2025-03-02": 96.67,
        "2025-03-03": 93.33,
        "2025-03-04": 90.0,
    }


def test_chart_series_interpolation_is_bounded_and_non_increasing(make_readings):
    v0, v1, d = 83.7, 12.2, 17
    out = series.chart_series(make_readings([(v0, 0), (v1, d)]))
    values = list(out.values())
    assert len(values) == d + 1
    assert all(a >= b for a, b in zip(values, values[1:]))
    assert all(v1 <= v <= v0 for v in values)


def test_chart_series_exact_on_reading_days(make_readings):
    readings = make_readings([(100.123, 0), (97.5, 2), (140.0, 5), (133.333, 6), (101.0, 11)])
    out = series.chart_series(readings)
    for r in readings:
        assert out[r.created_at.strftime("%Y-%m-%d")] == r.current_reading


def test_chart_series_sorts_input(make_readings):
    readings = make_readings([(100, 0), (80, 2), (70, 3)])
    shuffled = [readings[2], readings[0], readings[1]]
    assert series.chart_series(shuffled) == series.chart_series(readings)
    assert list(series.chart_series(shuffled))[0] == "2025-03-01"


def test_chart_series_edge_sizes(make_readings):
    assert series.chart_series([]) == {}
    assert series.chart_series(make_readings([(42, 0)])) == {"2025-03-01": 42.0}


def test_chart_series_same_day_readings():
    """The later of two same-day readings owns that day."""
    day = datetime(2025, 3, 1, 8)
    readings = [
        Reading(current_reading=100, created_at=day),
        Reading(current_reading=95, created_at=day + timedelta(hours=12)),
        Reading(current_reading=80, created_at=day + timedelta(days=2)),
    ]
    assert series.chart_series(readings) == {
        "2025-03-01": 95.0,
        "2025-03-02": 87.5,
        "2025-03-03": 80.0,
    }


def test_readings_and_top_ups_data(two_readings, top_ups):
    assert series.readings_data(two_readings) == {"2025-03-01": 100.0, "2025-03-04": 70.0}
    assert series.top_ups_data(top_ups) == {"2025-03-04": 50.0, "2025-03-11": 25.0}


def test_line_chart_data(two_readings, top_ups):
    out = series.line_chart_data(two_readings, top_ups)
    assert [d["name"] for d in out] == ["Readings", "Top Ups"]
    assert len(out[0]["data"]) == 4  # filled Mar 1..Mar 4
    assert out[1]["data"]["2025-03-04"] == 50.0

    raw = series.line_chart_data(two_readings, top_ups, filled=False)
    assert raw[0]["data"] == {"2025-03-01": 100.0, "2025-03-04": 70.0}

    empty = series.line_chart_data(two_readings)
    assert empty[1]["data"] == {}


def test_chart_series_uses_config_tz():
    readings = [
        Reading(current_reading=100, created_at=datetime(2025, 3, 1, 12, tzinfo=timezone.utc)),
        Reading(current_reading=80, created_at=datetime(2025, 3, 2, 15, tzinfo=timezone.utc)),
    ]
    assert series.chart_series(readings) == {"2025-03-01": 100.0, "2025-03-02": 80.0}

    cfg = EngineConfig(tz="Australia/Brisbane")
    assert series.chart_series(readings, config=cfg) == {
        "2025-03-01": 100.0,
        "2025-03-02": 90.0,
        "2025-03-03": 80.0,
    }


def test_chart_series_across_dst_change():
    readings = [
        Reading(current_reading=100, created_at="2025-04-05T09:00:00+11:00"),
        Reading(current_reading=70, created_at="2025-04-08T09:00:00+10:00"),
    ]
    out = series.chart_series(readings, config=EngineConfig(tz="Australia/Sydney"))
    assert out == {
        "2025-04-05": 100.0,
        "2025-04-06": 90.0,
        "2025-04-07": 80.0,
        "2025-04-08": 70.0,
    }
