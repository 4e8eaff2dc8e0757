from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from ..core import canon
from ..core.exceptions import ConfigError, require
from ..core.types import UsageLevelName, UsageStatus

MonthOrder = Literal["first_seen", "calendar"]


def check_month_order(order: str) -> None:
    require(
        order in ("first_seen", "calendar"),
        "month_order must be one of: first_seen, calendar",
        ConfigError,
    )


@dataclass(frozen=True)
class UsageBand:
    level: UsageLevelName
    status: UsageStatus
    icon: str
    # Half-open [lower, upper): integer bounds 0-9 / 10-15 / 16+ widened so
    # fractional averages such as 9.5 still land in a band
    lower: float  # inclusive
    upper: float = math.inf  # exclusive

    def contains(self, units_per_day: float) -> bool:
        return self.lower <= units_per_day < self.upper


def _default_bands() -> List[UsageBand]:
    return [
        UsageBand("low", "success", "check-circle", 0.0, 10.0),
        UsageBand("okay", "warning", "exclamation-circle", 10.0, 16.0),
        UsageBand("high", "danger", "exclamation-triangle", 16.0),
    ]


@dataclass
class UsageConfig:
    # Checked in order; first match wins
    bands: List[UsageBand] = field(default_factory=_default_bands)

    def __post_init__(self) -> None:
        require(len(self.bands) > 0, "At least one usage band is required.", ConfigError)
        for band in self.bands:
            require(
                band.lower < band.upper,
                f"Usage band '{band.level}' must have lower < upper.",
                ConfigError,
            )


@dataclass
class EngineConfig:
    decimals: int = canon.DEFAULT_DECIMALS
    # Zone used for calendar dates and for "today"; None keeps timestamps' own wall time
    tz: Optional[str] = None
    date_format: str = canon.DATE_FORMAT
    month_format: str = canon.MONTH_FORMAT
    month_order: MonthOrder = "first_seen"
    usage: UsageConfig = field(default_factory=UsageConfig)

    def __post_init__(self) -> None:
        require(self.decimals >= 0, "decimals must be >= 0.", ConfigError)
        check_month_order(self.month_order)


def default_config() -> EngineConfig:
    return EngineConfig()
