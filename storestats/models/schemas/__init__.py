"""Schemas shared by the reporting helpers.

Sub-modules:
- date_range: Reporting period names, labels and resolved ranges
"""
from .date_range import (
    PREDEFINED_PERIOD_LABELS,
    QUERY_DATETIME_FORMAT,
    PredefinedPeriod,
    ResolutionContext,
    ResolvedRange,
    load_timezone,
)

__all__ = [
    "PREDEFINED_PERIOD_LABELS",
    "QUERY_DATETIME_FORMAT",
    "PredefinedPeriod",
    "ResolutionContext",
    "ResolvedRange",
    "load_timezone",
]
