from datetime import datetime, timedelta

import pytest

from prepaylogic import Reading, TopUp

DAY0 = datetime(2025, 3, 1, 9, 0)


@pytest.fixture
def make_readings():
    """Build Reading records from (balance, day offset from DAY0) pairs."""

    def _make(pairs, start=DAY0):
        return [
            Reading(current_reading=value, created_at=start + timedelta(days=offset))
            for value, offset in pairs
        ]

    return _make


@pytest.fixture
def two_readings(make_readings):
    # 30 units over 3 days -> 10 units/day
    return make_readings([(100, 0), (70, 3)])


@pytest.fixture
def readings_with_topup(make_readings):
    # top-up lands between day 3 and day 4
    return make_readings([(100, 0), (70, 3), (120, 4)])


@pytest.fixture
def top_ups():
    return [
        TopUp(amount=2000, units=50.0, date=DAY0 + timedelta(days=3, hours=6)),
        TopUp(amount=1000, units=25.0, date=DAY0 + timedelta(days=10)),
    ]
