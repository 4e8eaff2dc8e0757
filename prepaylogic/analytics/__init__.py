"""Analytics and computational operations."""

from . import config, deltas, forecast, histogram, series, usage, summary

__all__ = ["config", "deltas", "forecast", "histogram", "series", "usage", "summary"]
