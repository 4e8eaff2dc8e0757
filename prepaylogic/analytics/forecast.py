from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..core import canon, ingest, utils
from ..core.types import Reading, ReadingFrame, Readings
from .config import EngineConfig, default_config
from .deltas import span_frame

logger = logging.getLogger(__name__)


def difference(
    readings: Sequence[Reading],
    reading: Reading,
    *,
    config: Optional[EngineConfig] = None,
) -> Optional[float]:
    """
    Balance used since the reading just before `reading` in `readings`.

    The predecessor is found by identity (position), not by timestamp.
    Returns None when there is no predecessor or the balance went up
    (a top-up happened in between).
    """
    cfg = config or default_config()
    pos = next((i for i, r in enumerate(readings) if r is reading), None)
    if pos is None:
        logger.debug("difference: reading at %s not in collection", reading.created_at)
        return None
    if pos == 0:
        return None

    prior = readings[pos - 1]
    result = utils.round_value(prior.current_reading - reading.current_reading, cfg.decimals)
    if result < 0:
        return None
    return result + 0.0  # -0.0 -> 0.0


def differences(readings: Readings, *, config: Optional[EngineConfig] = None) -> pd.Series:
    """Vectorised `difference` for every row; NaN where unavailable."""
    cfg = config or default_config()
    frame = ingest.as_frame(readings, tz=cfg.tz)
    values = frame[canon.VALUE_COL].to_numpy(dtype=float)

    out = np.full(len(values), np.nan)
    if len(values) > 1:
        diffs = utils.round_array(values[:-1] - values[1:], cfg.decimals)
        out[1:] = np.where(diffs < 0, np.nan, diffs + 0.0)
    return pd.Series(out, index=frame.index, name="difference")


def _average_rate(frame: ReadingFrame, cfg: EngineConfig) -> Optional[float]:
    if len(frame) < 2:
        return None
    spans = span_frame(frame, config=cfg)
    total_days = int(spans["days"].sum())
    total_consumption = float(spans["consumption"].sum())
    if total_days <= 0 or total_consumption <= 0:
        logger.debug(
            "average rate unavailable: %d valid spans over %d readings",
            len(spans),
            len(frame),
        )
        return None
    return utils.round_value(total_consumption / total_days, cfg.decimals)


def average_daily_consumption(
    readings: Readings, *, config: Optional[EngineConfig] = None
) -> Optional[float]:
    """Total consumption over total days across all valid spans (units/day)."""
    cfg = config or default_config()
    return _average_rate(ingest.as_frame(readings, tz=cfg.tz), cfg)


def average_daily_consumption_current_month(
    readings: Readings,
    *,
    config: Optional[EngineConfig] = None,
    today: Optional[date] = None,
) -> Optional[float]:
    """
    Same as `average_daily_consumption`, using only readings taken in the
    current calendar month. The month comes from the clock (or `today`),
    not from the data.
    """
    cfg = config or default_config()
    day = today or utils.today(cfg.tz)
    frame = ingest.as_frame(readings, tz=cfg.tz)

    local = utils.wall_time_index(pd.DatetimeIndex(frame.index), cfg.tz)
    mask = np.asarray((local.year == day.year) & (local.month == day.month))
    month_frame = frame.loc[mask]
    if len(month_frame) < 2:
        return None
    return _average_rate(month_frame, cfg)


def day_zero(
    readings: Readings,
    *,
    config: Optional[EngineConfig] = None,
    today: Optional[date] = None,
) -> date:
    """
    Estimate the date the balance reaches zero at the average daily rate.

    Always returns a date. Without enough history, or without a positive
    rate, the end of the current month is returned instead. A rate so low
    the date would pass the end of the calendar gives `date.max`.
    """
    cfg = config or default_config()
    fallback = utils.end_of_month(today or utils.today(cfg.tz))

    if not isinstance(readings, pd.DataFrame) and len(readings) > 0:
        if readings[0] is readings[-1]:
            return fallback

    frame = ingest.as_frame(readings, tz=cfg.tz)
    if len(frame) < 2:
        logger.debug("day_zero: %d readings, falling back to %s", len(frame), fallback)
        return fallback

    idx = pd.DatetimeIndex(frame.index)
    first_day = utils.local_date(idx[0], cfg.tz)
    latest_day = utils.local_date(idx[-1], cfg.tz)
    if (latest_day - first_day).days <= 0:
        logger.debug("day_zero: readings span no whole day, falling back to %s", fallback)
        return fallback

    avg = _average_rate(frame, cfg)
    if avg is None or avg <= 0:
        logger.debug("day_zero: no positive rate, falling back to %s", fallback)
        return fallback

    latest_value = float(frame[canon.VALUE_COL].iloc[-1])
    if not math.isfinite(latest_value):
        return fallback

    days_to_zero = math.ceil(latest_value / avg)
    try:
        return latest_day + timedelta(days=days_to_zero)
    except OverflowError:
        logger.debug("day_zero: %d days to zero is past date.max", days_to_zero)
        return date.max
