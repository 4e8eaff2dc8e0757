from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.types import UsageLevel
from .config import EngineConfig, default_config

logger = logging.getLogger(__name__)


def classify(
    units_per_day: Optional[float], *, config: Optional[EngineConfig] = None
) -> Optional[UsageLevel]:
    """
    Map a units/day figure to the first matching usage band.

    Returns None when nothing matches (negative, NaN or missing input);
    callers decide how to show that.
    """
    cfg = config or default_config()
    if units_per_day is None or math.isnan(units_per_day):
        return None

    for band in cfg.usage.bands:
        if band.contains(units_per_day):
            return UsageLevel(level=band.level, status=band.status, icon=band.icon)

    logger.debug("classify: %s units/day matches no usage band", units_per_day)
    return None
