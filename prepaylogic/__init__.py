from .core import canon, exceptions, ingest, types, utils, validate
from .analytics import config, deltas, forecast, histogram, series, usage, summary
from .core.types import Reading, TopUp, UsageLevel

__all__ = [
    "canon",
    "exceptions",
    "ingest",
    "types",
    "utils",
    "validate",
    "config",
    "deltas",
    "forecast",
    "histogram",
    "series",
    "usage",
    "summary",
    "Reading",
    "TopUp",
    "UsageLevel",
]
