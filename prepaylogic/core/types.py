from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Literal, Optional, Sequence, TypedDict, Union

import pandas as pd
from pydantic import BaseModel

UsageLevelName = Literal["low", "okay", "high"]
UsageStatus = Literal["success", "warning", "danger"]


class Reading(BaseModel):
    current_reading: float  # remaining balance in units
    created_at: datetime
    model_config = {"frozen": True}


class TopUp(BaseModel):
    amount: int  # minor currency units
    units: float
    date: datetime
    model_config = {"frozen": True}


class ReadingFrame(pd.DataFrame):
    """
    Canonical reading dataframe.

    Expected:
      - DatetimeIndex named 'created_at', in caller order
      - Columns: ['current_reading']
    """

    @property
    def _constructor(self):
        return ReadingFrame

    @property
    def current_reading(self) -> pd.Series:
        return self["current_reading"]


Readings = Union[Sequence[Reading], pd.DataFrame]


@dataclass(frozen=True)
class UsageLevel:
    level: UsageLevelName
    status: UsageStatus
    icon: str


# Dashboard payload
class ChartDataset(TypedDict):
    name: str
    data: Dict[str, float]


class SummaryMeta(TypedDict):
    readings: int
    top_ups: int
    start: Optional[str]
    end: Optional[str]
    days: int


class SummaryStats(TypedDict):
    latest_reading: Optional[float]
    average_daily: Optional[float]
    average_daily_current_month: Optional[float]
    day_zero: str
    usage: Optional[Dict[str, str]]
    top_up_units: float
    top_up_amount: int


class SummaryDatasets(TypedDict):
    histogram: Dict[str, float]
    series: Dict[str, float]
    line_chart: List[ChartDataset]


class SummaryPayload(TypedDict):
    meta: SummaryMeta
    stats: SummaryStats
    datasets: SummaryDatasets
