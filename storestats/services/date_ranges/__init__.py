"""Reporting date ranges.

This module turns period descriptors into the inclusive timestamp window
used to filter sales and earnings report queries.

Sub-modules:
- period_utils: Calendar arithmetic for the named periods
- parsing: Free-form date string parsing relative to a reference instant
- resolver: Main DateRangeResolver class
"""
from .period_utils import (
    PERIOD_RULES,
    calculate_period_range,
    day_end_timestamp,
    day_start_timestamp,
    days_in_month,
    month_bounds,
    quarter_bounds,
    week_bounds,
)
from .parsing import ParsedDate, parse_date_descriptor, parse_date_string
from .resolver import DateHook, DateRangeResolver, resolve_date_range

__all__ = [
    # Constants
    "PERIOD_RULES",
    # Calendar utilities
    "calculate_period_range",
    "day_end_timestamp",
    "day_start_timestamp",
    "days_in_month",
    "month_bounds",
    "quarter_bounds",
    "week_bounds",
    # Parsing
    "ParsedDate",
    "parse_date_descriptor",
    "parse_date_string",
    # Service class
    "DateHook",
    "DateRangeResolver",
    "resolve_date_range",
]
