from __future__ import annotations
from typing import Iterator, Optional, Tuple

import numpy as np
import pandas as pd

from ..core import canon, ingest, utils
from ..core.types import Readings
from .config import EngineConfig, default_config

SPAN_COLS = ["days", "consumption", "rate", "month"]


def _empty_spans() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "days": np.array([], dtype=int),
            "consumption": np.array([], dtype=float),
            "rate": np.array([], dtype=float),
            "month": np.array([], dtype=object),
        },
        index=pd.DatetimeIndex([], name=canon.INDEX_NAME),
    )


def span_frame(readings: Readings, *, config: Optional[EngineConfig] = None) -> pd.DataFrame:
    """
    One row per valid consecutive pair of readings.

    Columns:
      - days: whole calendar days from the prior reading to this one
      - consumption: prior balance minus this balance
      - rate: consumption / days
      - month: short month label of this (the later) reading

    Indexed by the later reading's timestamp. Pairs with days <= 0 (same-day
    readings) or consumption <= 0 (a top-up landed in between) are dropped.
    """
    cfg = config or default_config()
    frame = ingest.as_frame(readings, tz=cfg.tz)
    if len(frame) < 2:
        return _empty_spans()

    idx = pd.DatetimeIndex(frame.index)
    values = frame[canon.VALUE_COL].to_numpy(dtype=float)

    out = pd.DataFrame(
        {
            "days": utils.day_gaps(idx, cfg.tz),
            "consumption": values[:-1] - values[1:],
            "month": np.asarray(utils.month_label(idx[1:], cfg.month_format, cfg.tz)),
        },
        index=idx[1:],
    )
    valid = (out["days"] > 0) & (out["consumption"] > 0)
    out = out.loc[valid.to_numpy()].copy()
    out["rate"] = out["consumption"] / out["days"]
    return out[SPAN_COLS]


def pairwise_deltas(
    readings: Readings, *, config: Optional[EngineConfig] = None
) -> Iterator[Tuple[int, float]]:
    """Lazily yield (days, consumption) for each valid span, oldest first."""
    spans = span_frame(readings, config=config)
    for days, consumption in zip(spans["days"], spans["consumption"]):
        yield int(days), float(consumption)
