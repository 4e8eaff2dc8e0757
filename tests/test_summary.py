"""Tests for the dashboard summary payload."""

from datetime import date

import prepaylogic as pl


def test_summary_payload_structure(make_readings, top_ups):
    readings = make_readings([(100, 0), (70, 3), (120, 4), (100, 6)])
    payload = pl.summary.summarise(readings, top_ups, today=date(2025, 3, 20))
    assert set(payload) == {"meta", "stats", "datasets"}

    meta = payload["meta"]
    assert meta["readings"] == 4
    assert meta["top_ups"] == 2
    assert meta["start"] == "2025-03-01T09:00:00"
    assert meta["days"] == 7

    stats = payload["stats"]
    assert stats["latest_reading"] == 100.0
    assert stats["average_daily"] == 10.0
    assert stats["average_daily_current_month"] == 10.0
    # 100 / 10 -> 10 days after 2025-03-07
    assert stats["day_zero"] == "2025-03-17"
    assert stats["usage"] == {"level": "okay", "status": "warning", "icon": "exclamation-circle"}
    assert stats["top_up_units"] == 75.0
    assert stats["top_up_amount"] == 3000

    datasets = payload["datasets"]
    assert datasets["histogram"] == {"Mar": 10.0}
    assert len(datasets["series"]) == 7
    assert [d["name"] for d in datasets["line_chart"]] == ["Readings", "Top Ups"]


def test_summary_without_data():
    payload = pl.summary.summarise([], today=date(2025, 4, 2))
    assert payload["meta"] == {
        "readings": 0,
        "top_ups": 0,
        "start": None,
        "end": None,
        "days": 0,
    }
    stats = payload["stats"]
    assert stats["average_daily"] is None
    assert stats["average_daily_current_month"] is None
    assert stats["usage"] is None
    assert stats["day_zero"] == "2025-04-30"
    assert payload["datasets"]["histogram"] == {}
    assert payload["datasets"]["series"] == {}
