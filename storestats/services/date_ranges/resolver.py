"""Date range resolution for sales and earnings reports.

Converts a start descriptor and an optional end descriptor into the
inclusive timestamp window used to filter report queries.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Any, Callable, Iterable, Mapping

from storestats.core.config import BaseAppSettings, get_settings
from storestats.core.logger import init_logging
from storestats.core.exceptions import ConfigurationError, InvalidDateError
from storestats.models.schemas.date_range import (
    PREDEFINED_PERIOD_LABELS,
    PredefinedPeriod,
    ResolutionContext,
    ResolvedRange,
    load_timezone,
)

from .parsing import parse_date_descriptor
from .period_utils import calculate_period_range, day_end_timestamp, day_start_timestamp

logger = logging.getLogger(__name__)

DateHook = Callable[[int, bool, ResolutionContext], int]


class DateRangeResolver:
    """Resolve reporting period descriptors into inclusive timestamp ranges.

    A descriptor is one of:
    - a predefined period name ('today', 'last_week', 'this_quarter', ...)
    - an int Unix timestamp, returned unchanged
    - a datetime (its instant) or a date (that calendar day)
    - a free-form date string, parsed relative to ``now``

    The resolver never reads the clock: ``now`` is always supplied by the
    caller. Instances are immutable; ``with_hook`` returns a new resolver.
    """

    def __init__(
        self,
        week_start: int = 1,
        timezone: tzinfo | str = "UTC",
        hooks: Iterable[DateHook] = (),
        period_overrides: Mapping[str, str | None] | None = None,
        default_period: str = PredefinedPeriod.THIS_MONTH.value,
    ):
        """
        Args:
            week_start: First day of the week, 0=Sunday .. 6=Saturday
            timezone: Store timezone used for day boundaries
            hooks: Post-processing callbacks ``(timestamp, is_end, context) -> int``
                applied in order to every converted boundary
            period_overrides: Relabel predefined periods, or disable one with None
            default_period: Period used when no start descriptor is given
        """
        if isinstance(week_start, bool) or not isinstance(week_start, int) or not 0 <= week_start <= 6:
            raise ConfigurationError("week_start", f"expected 0 (Sunday) to 6 (Saturday), got {week_start!r}")
        self.week_start = week_start
        self.timezone = load_timezone(timezone)
        self.hooks: tuple[DateHook, ...] = tuple(hooks)
        self.period_overrides: dict[str, str | None] = dict(period_overrides or {})
        self._periods = self._build_periods(self.period_overrides)
        if isinstance(default_period, PredefinedPeriod):
            default_period = default_period.value
        if default_period not in self._periods:
            raise ConfigurationError("default_period", f"{default_period!r} is not an enabled period")
        self.default_period = default_period

    @classmethod
    def from_settings(cls, settings: BaseAppSettings | None = None, **kwargs: Any) -> DateRangeResolver:
        """Build a resolver from application settings; kwargs win over settings.

        Also configures root logging from the application settings if nothing has yet.
        """
        settings = settings or get_settings()
        init_logging()
        kwargs.setdefault("week_start", settings.WEEK_START)
        kwargs.setdefault("timezone", settings.TIMEZONE)
        kwargs.setdefault("default_period", settings.DEFAULT_PERIOD)
        return cls(**kwargs)

    def with_hook(self, hook: DateHook) -> DateRangeResolver:
        return DateRangeResolver(
            week_start=self.week_start,
            timezone=self.timezone,
            hooks=self.hooks + (hook,),
            period_overrides=self.period_overrides,
            default_period=self.default_period,
        )

    @staticmethod
    def _build_periods(overrides: Mapping[str, str | None]) -> dict[str, str]:
        periods = dict(PREDEFINED_PERIOD_LABELS)
        for name, label in overrides.items():
            if name not in periods:
                logger.warning("Ignoring override for unknown period %r", name)
                continue
            if label is None:
                del periods[name]
            else:
                periods[name] = label
        return periods

    def get_predefined_periods(self) -> dict[str, str]:
        """Enabled period names mapped to their display labels."""
        return dict(self._periods)

    def _localize(self, now: datetime | int) -> datetime:
        if isinstance(now, bool):
            raise TypeError("now must be a datetime or an int timestamp")
        if isinstance(now, int):
            return datetime.fromtimestamp(now, tz=self.timezone)
        if not isinstance(now, datetime):
            raise TypeError("now must be a datetime or an int timestamp")
        if now.tzinfo is None:
            return now.replace(tzinfo=self.timezone)
        return now.astimezone(self.timezone)

    def _to_timestamp(self, descriptor: Any, now: datetime, is_end: bool) -> int:
        if isinstance(descriptor, PredefinedPeriod):
            descriptor = descriptor.value

        if isinstance(descriptor, str) and descriptor in self._periods:
            start_day, end_day = calculate_period_range(descriptor, now.date(), self.week_start)
            if is_end:
                return day_end_timestamp(end_day, self.timezone)
            return day_start_timestamp(start_day, self.timezone)

        if isinstance(descriptor, bool):
            raise InvalidDateError(descriptor, reason="booleans are not timestamps")
        if isinstance(descriptor, int):
            return descriptor
        if isinstance(descriptor, datetime):
            if descriptor.tzinfo is None:
                descriptor = descriptor.replace(tzinfo=self.timezone)
            return int(descriptor.timestamp())
        if isinstance(descriptor, str):
            parsed = parse_date_descriptor(descriptor, now)
            if not parsed.whole_day:
                return int(parsed.value.timestamp())
            descriptor = parsed.value.date()
        if isinstance(descriptor, date):
            if is_end:
                return day_end_timestamp(descriptor, self.timezone)
            return day_start_timestamp(descriptor, self.timezone)

        raise InvalidDateError(descriptor, reason=f"unsupported type {type(descriptor).__name__}")

    def convert(self, descriptor: Any, *, now: datetime | int, is_end: bool = False) -> int:
        """Convert a single descriptor to a boundary timestamp.

        Raises:
            InvalidDateError: If the descriptor is unrecognized or unparsable
        """
        local_now = self._localize(now)
        timestamp = self._to_timestamp(descriptor, local_now, is_end)
        if not self.hooks:
            return timestamp

        context = ResolutionContext(
            now=local_now,
            descriptor=descriptor,
            is_end=is_end,
            week_start=self.week_start,
            timezone=self.timezone,
        )
        for hook in self.hooks:
            timestamp = hook(timestamp, is_end, context)
            if isinstance(timestamp, bool) or not isinstance(timestamp, int):
                raise TypeError(f"Date hook {hook!r} must return an int timestamp, got {type(timestamp).__name__}")
        return timestamp

    def resolve(self, start: Any = None, end: Any = None, *, now: datetime | int) -> ResolvedRange:
        """Resolve start/end descriptors into an inclusive range.

        Args:
            start: Start descriptor; defaults to the configured default period
            end: End descriptor; defaults to ``start``
            now: Reference instant (naive values are read in the store timezone)

        Returns:
            ResolvedRange with ``start <= end``

        Raises:
            InvalidDateError: If either descriptor is invalid or the range is inverted
        """
        if start is None or start == "":
            start = self.default_period
        if end is None or end == "":
            end = start

        start_ts = self.convert(start, now=now, is_end=False)
        end_ts = self.convert(end, now=now, is_end=True)
        if start_ts > end_ts:
            raise InvalidDateError(end, reason=f"end date is before start date {start!r}")

        logger.debug("Resolved date range start=%r end=%r -> %s..%s", start, end, start_ts, end_ts)
        return ResolvedRange(start=start_ts, end=end_ts)


def resolve_date_range(
    start: Any = None,
    end: Any = None,
    *,
    now: datetime | int,
    week_start: int | None = None,
    timezone: tzinfo | str | None = None,
) -> ResolvedRange:
    """Resolve a date range with a resolver built from application settings."""
    kwargs: dict[str, Any] = {}
    if week_start is not None:
        kwargs["week_start"] = week_start
    if timezone is not None:
        kwargs["timezone"] = timezone
    return DateRangeResolver.from_settings(**kwargs).resolve(start, end, now=now)

