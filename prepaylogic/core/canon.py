from __future__ import annotations
from typing import Final

INDEX_NAME: Final[str] = "created_at"
VALUE_COL: Final[str] = "current_reading"
REQUIRED_COLS: Final[list[str]] = [VALUE_COL]

TOPUP_INDEX_NAME: Final[str] = "date"
TOPUP_COLS: Final[list[str]] = ["amount", "units"]

DATE_FORMAT: Final[str] = "%Y-%m-%d"
MONTH_FORMAT: Final[str] = "%b"
DEFAULT_DECIMALS: Final[int] = 2

COMMON_TIMESTAMP_NAMES = ("created_at", "timestamp", "time", "ts", "datetime", "date")
COMMON_VALUE_NAMES = ("current_reading", "reading", "balance", "units", "value")
