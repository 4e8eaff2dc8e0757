from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from ..core import utils
from ..core.types import Readings
from .config import EngineConfig, MonthOrder, check_month_order, default_config
from .deltas import span_frame


def monthly_consumption_histogram(
    readings: Readings,
    *,
    config: Optional[EngineConfig] = None,
    order: Optional[MonthOrder] = None,
) -> Dict[str, float]:
    """
    Average units/day per month label, e.g. {'Jan': 12.5, 'Feb': 9.75}.

    Each valid span contributes its own per-day rate to the month of its
    later reading; a month's figure is the plain mean of those rates, so a
    long span weighs the same as a short one. Months without a valid span
    are left out. Keys follow the order spans first appear unless
    order='calendar'. Labels carry no year, so the same month of different
    years share a bucket.
    """
    cfg = config or default_config()
    order = order or cfg.month_order
    check_month_order(order)

    spans = span_frame(readings, config=cfg)
    if spans.empty:
        return {}

    means = spans.groupby("month", sort=False)["rate"].mean()
    labels = list(means.index)
    if order == "calendar":
        labels.sort(key=lambda label: datetime.strptime(label, cfg.month_format).month)

    return {str(label): utils.round_value(means[label], cfg.decimals) for label in labels}
