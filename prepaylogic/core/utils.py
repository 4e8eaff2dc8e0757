# prepaylogic/core/utils.py
from __future__ import annotations
import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import numpy as np
import pandas as pd

from . import canon


def round_value(value: float, decimals: int = canon.DEFAULT_DECIMALS) -> float:
    """Round half-up on the decimal repr, so 2.675 -> 2.68 rather than 2.67."""
    value = float(value)
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_array(values: np.ndarray, decimals: int = canon.DEFAULT_DECIMALS) -> np.ndarray:
    return np.array([round_value(v, decimals) for v in values], dtype=float)


def wall_time_index(idx: pd.DatetimeIndex, tz: Optional[str] = None) -> pd.DatetimeIndex:
    """
    Return a naive DatetimeIndex of local wall-clock times.

    - Aware timestamps are converted to `tz` (when given) before dropping tz.
    - Naive timestamps are taken as wall time already.
    """
    idx = pd.DatetimeIndex(idx)
    if idx.tz is None:
        return idx
    if tz:
        idx = idx.tz_convert(tz)
    return idx.tz_localize(None)


def calendar_days(idx: pd.DatetimeIndex, tz: Optional[str] = None) -> pd.DatetimeIndex:
    """Midnight-normalised local dates; naive so day arithmetic ignores DST."""
    return wall_time_index(idx, tz).normalize()


def day_gaps(idx: pd.DatetimeIndex, tz: Optional[str] = None) -> np.ndarray:
    """Whole calendar days between each consecutive pair of timestamps (len-1)."""
    days = calendar_days(idx, tz)
    if len(days) < 2:
        return np.array([], dtype=int)
    return np.asarray((days[1:] - days[:-1]).days, dtype=int)


def date_keys(
    idx: pd.DatetimeIndex, fmt: str = canon.DATE_FORMAT, tz: Optional[str] = None
) -> pd.Index:
    return wall_time_index(idx, tz).strftime(fmt)


def month_label(
    idx: pd.DatetimeIndex, fmt: str = canon.MONTH_FORMAT, tz: Optional[str] = None
) -> pd.Index:
    """Short month names ('Jan', 'Feb', ...) for a datetime-like index."""
    return wall_time_index(idx, tz).strftime(fmt)


def local_date(ts: pd.Timestamp, tz: Optional[str] = None) -> date:
    ts = pd.Timestamp(ts)
    if ts.tz is not None:
        if tz:
            ts = ts.tz_convert(tz)
        ts = ts.tz_localize(None)
    return ts.date()


def today(tz: Optional[str] = None) -> date:
    if tz:
        return pd.Timestamp.now(tz=tz).date()
    return date.today()


def end_of_month(day: date) -> date:
    return (pd.Timestamp(day) + pd.offsets.MonthEnd(0)).date()
