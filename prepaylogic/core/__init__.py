"""Core data structures and operations."""

from . import canon, exceptions, ingest, types, utils, validate

__all__ = ["canon", "exceptions", "ingest", "types", "utils", "validate"]
