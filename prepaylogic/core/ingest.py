from __future__ import annotations
from typing import Iterable, Optional, Sequence, cast

import numpy as np
import pandas as pd

from . import canon, exceptions, validate
from .types import Reading, ReadingFrame, Readings, TopUp


def _datetime_index(values: list, name: str, tz: Optional[str] = None) -> pd.DatetimeIndex:
    """
    Timestamps as a DatetimeIndex.

    Aware values with differing UTC offsets (readings either side of a DST
    change) are converted to `tz` when given, otherwise each keeps its own
    wall-clock time and the offset is dropped.
    """
    try:
        return pd.DatetimeIndex(values, name=name)
    except (TypeError, ValueError):
        pass

    try:
        stamps = [pd.Timestamp(v) for v in values]
    except (TypeError, ValueError) as exc:
        raise exceptions.IngestError(f"Unparseable timestamps for '{name}': {exc}") from exc
    if any(ts.tz is None for ts in stamps):
        raise exceptions.IngestError(
            f"Timestamps for '{name}' must all be timezone-aware or all be naive."
        )
    if tz:
        return pd.DatetimeIndex([ts.tz_convert(tz) for ts in stamps], name=name)
    return pd.DatetimeIndex([ts.tz_localize(None) for ts in stamps], name=name)


def from_readings(readings: Iterable[Reading], *, tz: Optional[str] = None) -> ReadingFrame:
    """
    Build the canonical frame from Reading records.

    Order is preserved exactly as given; callers own the ascending order.
    """
    readings = list(readings)
    idx = _datetime_index([r.created_at for r in readings], canon.INDEX_NAME, tz)
    values = np.asarray([r.current_reading for r in readings], dtype=float)
    return ReadingFrame({canon.VALUE_COL: values}, index=idx)


def _auto_rename(df: pd.DataFrame, tz: Optional[str] = None) -> pd.DataFrame:
    new = df.copy()

    # 1) If index is already datetime-like, just name it created_at
    if isinstance(new.index, pd.DatetimeIndex):
        new.index.name = canon.INDEX_NAME
    else:
        # 2) Otherwise try to find a timestamp column and set as index
        cols = {str(c).lower(): c for c in new.columns}
        tcol = next((cols[k] for k in canon.COMMON_TIMESTAMP_NAMES if k in cols), None)
        if tcol is None:
            raise exceptions.IngestError(
                "No timestamp column found and index is not datetime. "
                f"Expected one of: {', '.join(canon.COMMON_TIMESTAMP_NAMES)}."
            )
        idx = _datetime_index(list(new[tcol]), canon.INDEX_NAME, tz)
        new = new.drop(columns=[tcol])
        new.index = idx

    # 3) Standardise the balance column name if needed
    if canon.VALUE_COL not in new.columns:
        cols = {str(c).lower(): c for c in new.columns}
        vcol = next((cols[k] for k in canon.COMMON_VALUE_NAMES if k in cols), None)
        if vcol is not None:
            new = new.rename(columns={vcol: canon.VALUE_COL})

    return new


def from_dataframe(
    df: pd.DataFrame, *, sort: bool = True, tz: Optional[str] = None
) -> ReadingFrame:
    """
    Normalise a DataFrame of readings to canon:
      - index: 'created_at' DatetimeIndex
      - columns: current_reading (float)

    With sort=True rows are stably sorted by timestamp; otherwise the
    caller's order is kept untouched.
    """
    df = _auto_rename(df, tz)
    if canon.VALUE_COL not in df.columns:
        raise exceptions.IngestError(
            f"Missing balance column. Expected one of: {', '.join(canon.COMMON_VALUE_NAMES)}."
        )

    df = df[[canon.VALUE_COL]].astype(float)
    if sort:
        df = df.sort_index(kind="mergesort")
    validate.assert_canon(df, require_sorted=sort)

    out = ReadingFrame(df)
    return cast(ReadingFrame, out)


def as_frame(readings: Readings, *, tz: Optional[str] = None) -> ReadingFrame:
    """Accept Reading records or a DataFrame and return the canonical frame."""
    if isinstance(readings, pd.DataFrame):
        if validate.is_canon(readings):
            return cast(ReadingFrame, ReadingFrame(readings[[canon.VALUE_COL]]))
        return from_dataframe(readings, sort=False, tz=tz)
    return from_readings(readings, tz=tz)


def top_ups_frame(
    top_ups: Sequence[TopUp] | pd.DataFrame, *, tz: Optional[str] = None
) -> pd.DataFrame:
    """Canonical top-up frame: index 'date', columns amount (int) and units (float)."""
    if isinstance(top_ups, pd.DataFrame):
        validate.assert_top_ups(top_ups)
        return top_ups[canon.TOPUP_COLS].copy()

    top_ups = list(top_ups)
    idx = _datetime_index([t.date for t in top_ups], canon.TOPUP_INDEX_NAME, tz)
    return pd.DataFrame(
        {
            "amount": np.asarray([t.amount for t in top_ups], dtype=np.int64),
            "units": np.asarray([t.units for t in top_ups], dtype=float),
        },
        index=idx,
    )
