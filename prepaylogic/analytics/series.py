from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..core import canon, ingest, utils
from ..core.types import ChartDataset, Readings, TopUp
from .config import EngineConfig, default_config


def chart_series(readings: Readings, *, config: Optional[EngineConfig] = None) -> Dict[str, float]:
    """
    Dense day-by-day balance series keyed by 'YYYY-MM-DD'.

    Every calendar day from the first to the last reading gets a value:
      - days with a reading keep that reading's balance
      - gaps where the balance fell are linearly interpolated (rounded)
      - gaps where the balance rose (a top-up) carry the earlier balance
        forward; the rise shows up on the next reading's day

    Input order does not matter here; readings are stably sorted first.
    The last reading's day always maps to its exact balance.
    """
    cfg = config or default_config()
    frame = ingest.as_frame(readings, tz=cfg.tz).sort_index(kind="mergesort")
    if frame.empty:
        return {}

    days = utils.calendar_days(pd.DatetimeIndex(frame.index), cfg.tz)
    values = frame[canon.VALUE_COL].to_numpy(dtype=float)

    filled: Dict[str, float] = {}
    for i in range(len(values) - 1):
        start_day, end_day = days[i], days[i + 1]
        start_value, end_value = float(values[i]), float(values[i + 1])

        filled[start_day.strftime(cfg.date_format)] = start_value

        days_diff = int((end_day - start_day).days)
        if days_diff <= 1:
            continue

        steps = np.arange(1, days_diff)
        gap = pd.date_range(start_day + pd.Timedelta(days=1), periods=len(steps), freq="D")
        if end_value < start_value:
            fill = utils.round_array(
                start_value + (end_value - start_value) * steps / days_diff, cfg.decimals
            )
        else:
            fill = np.full(len(steps), start_value)

        for key, value in zip(gap.strftime(cfg.date_format), fill):
            filled[key] = float(value)

    filled[days[-1].strftime(cfg.date_format)] = float(values[-1])
    return filled


def readings_data(readings: Readings, *, config: Optional[EngineConfig] = None) -> Dict[str, float]:
    """Raw readings keyed by day; a later reading on the same day wins."""
    cfg = config or default_config()
    frame = ingest.as_frame(readings, tz=cfg.tz)
    keys = utils.date_keys(pd.DatetimeIndex(frame.index), cfg.date_format, cfg.tz)
    values = frame[canon.VALUE_COL].to_numpy(dtype=float)
    return {str(k): float(v) for k, v in zip(keys, values)}


def top_ups_data(
    top_ups: Sequence[TopUp] | pd.DataFrame, *, config: Optional[EngineConfig] = None
) -> Dict[str, float]:
    """Top-up units keyed by day, for overlaying on the balance chart."""
    cfg = config or default_config()
    frame = ingest.top_ups_frame(top_ups, tz=cfg.tz)
    keys = utils.date_keys(pd.DatetimeIndex(frame.index), cfg.date_format, cfg.tz)
    units = frame["units"].to_numpy(dtype=float)
    return {str(k): float(v) for k, v in zip(keys, units)}


def line_chart_data(
    readings: Readings,
    top_ups: Sequence[TopUp] | pd.DataFrame = (),
    *,
    filled: bool = True,
    config: Optional[EngineConfig] = None,
) -> List[ChartDataset]:
    """Two named datasets, 'Readings' and 'Top Ups', ready for a line chart."""
    cfg = config or default_config()
    balance = chart_series(readings, config=cfg) if filled else readings_data(readings, config=cfg)
    return [
        {"name": "Readings", "data": balance},
        {"name": "Top Ups", "data": top_ups_data(top_ups, config=cfg)},
    ]
