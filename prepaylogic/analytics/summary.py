from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional, Sequence, cast

import pandas as pd

from ..core import canon, ingest, utils
from ..core.types import Readings, SummaryPayload, TopUp
from .config import EngineConfig, default_config
from . import forecast, histogram, series, usage


def summarise(
    readings: Readings,
    top_ups: Sequence[TopUp] | pd.DataFrame = (),
    *,
    config: Optional[EngineConfig] = None,
    today: Optional[date] = None,
) -> SummaryPayload:
    cfg = config or default_config()
    today = today or utils.today(cfg.tz)

    frame = ingest.as_frame(readings, tz=cfg.tz)
    topups = ingest.top_ups_frame(top_ups, tz=cfg.tz)
    idx = pd.DatetimeIndex(frame.index)

    if len(frame):
        start: Optional[str] = idx[0].isoformat()
        end: Optional[str] = idx[-1].isoformat()
        days = (utils.local_date(idx[-1], cfg.tz) - utils.local_date(idx[0], cfg.tz)).days + 1
        latest: Optional[float] = float(frame[canon.VALUE_COL].iloc[-1])
    else:
        start = end = None
        days = 0
        latest = None

    average = forecast.average_daily_consumption(frame, config=cfg)
    level = usage.classify(average, config=cfg)

    payload: SummaryPayload = cast(
        SummaryPayload,
        {
            "meta": {
                "readings": int(len(frame)),
                "top_ups": int(len(topups)),
                "start": start,
                "end": end,
                "days": int(days),
            },
            "stats": {
                "latest_reading": latest,
                "average_daily": average,
                "average_daily_current_month": forecast.average_daily_consumption_current_month(
                    frame, config=cfg, today=today
                ),
                "day_zero": forecast.day_zero(frame, config=cfg, today=today).isoformat(),
                "usage": asdict(level) if level is not None else None,
                "top_up_units": float(topups["units"].sum()),
                "top_up_amount": int(topups["amount"].sum()),
            },
            "datasets": {
                "histogram": histogram.monthly_consumption_histogram(frame, config=cfg),
                "series": series.chart_series(frame, config=cfg),
                "line_chart": series.line_chart_data(frame, topups, config=cfg),
            },
        },
    )
    return payload
