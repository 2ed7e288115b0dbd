"""Date range schemas."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, model_validator

from storestats.core.exceptions import ConfigurationError

QUERY_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def load_timezone(value: dt.tzinfo | str) -> dt.tzinfo:
    """Return ``value`` as a tzinfo, looking IANA names up in the zone database."""
    if isinstance(value, dt.tzinfo):
        return value
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError("timezone", f"unknown timezone {value!r}") from exc


class PredefinedPeriod(str, Enum):
    """Named reporting periods understood by the resolver."""
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_QUARTER = "this_quarter"
    LAST_QUARTER = "last_quarter"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"


PREDEFINED_PERIOD_LABELS: dict[str, str] = {
    PredefinedPeriod.TODAY.value: "Today",
    PredefinedPeriod.YESTERDAY.value: "Yesterday",
    PredefinedPeriod.THIS_WEEK.value: "This Week",
    PredefinedPeriod.LAST_WEEK.value: "Last Week",
    PredefinedPeriod.THIS_MONTH.value: "This Month",
    PredefinedPeriod.LAST_MONTH.value: "Last Month",
    PredefinedPeriod.THIS_QUARTER.value: "This Quarter",
    PredefinedPeriod.LAST_QUARTER.value: "Last Quarter",
    PredefinedPeriod.THIS_YEAR.value: "This Year",
    PredefinedPeriod.LAST_YEAR.value: "Last Year",
}


class ResolvedRange(BaseModel):
    """Inclusive reporting window as Unix timestamps (seconds)."""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _check_order(self) -> ResolvedRange:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not be after end ({self.end})")
        return self

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp <= self.end

    def to_datetimes(self, tz: dt.tzinfo | str = dt.timezone.utc) -> tuple[dt.datetime, dt.datetime]:
        """Return the bounds as aware datetimes in ``tz``."""
        zone = load_timezone(tz)
        return (
            dt.datetime.fromtimestamp(self.start, tz=zone),
            dt.datetime.fromtimestamp(self.end, tz=zone),
        )

    def format_bounds(self, tz: dt.tzinfo | str = dt.timezone.utc) -> tuple[str, str]:
        """Format the bounds as ``YYYY-MM-DD HH:MM:SS`` strings for query filters."""
        start, end = self.to_datetimes(tz)
        return start.strftime(QUERY_DATETIME_FORMAT), end.strftime(QUERY_DATETIME_FORMAT)


@dataclass(frozen=True)
class ResolutionContext:
    """Read-only view of a conversion, handed to post-processing hooks."""
    now: dt.datetime
    descriptor: Any
    is_end: bool
    week_start: int
    timezone: dt.tzinfo
