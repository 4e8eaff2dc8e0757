from __future__ import annotations
import pandas as pd

from . import canon, exceptions


def assert_canon(df: pd.DataFrame, *, require_sorted: bool = True) -> None:
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.CanonError("Index must be a DatetimeIndex.")
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.CanonError(f"Index must be '{canon.INDEX_NAME}'.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")
    if require_sorted and not df.index.is_monotonic_increasing:
        raise exceptions.CanonError("Index must be sorted ascending.")


def is_canon(df: pd.DataFrame) -> bool:
    """True when df already has the canonical index and columns (any order)."""
    try:
        assert_canon(df, require_sorted=False)
    except exceptions.CanonError:
        return False
    return True


def assert_top_ups(df: pd.DataFrame) -> None:
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.CanonError("Top-up index must be a DatetimeIndex.")
    if df.index.name != canon.TOPUP_INDEX_NAME:
        raise exceptions.CanonError(
            f"Top-up index must be '{canon.TOPUP_INDEX_NAME}'."
        )
    for col in canon.TOPUP_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required top-up column '{col}'.")
