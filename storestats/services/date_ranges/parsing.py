"""Free-form date string parsing.

Turns strings such as "August 3, 2013", "2024-02-15 10:30", "+1 week 2 days",
"3 days ago", "next monday" or "first day of last month" into an aware
datetime, relative to a caller-supplied reference instant.
"""
import logging
import re
from datetime import datetime, time, timedelta
from typing import NamedTuple

from dateutil import parser as dtparser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from storestats.core.exceptions import InvalidDateError
from .period_utils import days_in_month

logger = logging.getLogger(__name__)

_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "fortnight": "fortnights",
    "month": "months",
    "year": "years",
}

_TERM = r"([+-]?)\s*(\d+)\s*(second|sec|minute|min|hour|day|week|fortnight|month|year)s?"
_OFFSET_RE = re.compile(rf"(?:\s*{_TERM})+")
_TERM_RE = re.compile(_TERM)

_WEEKDAYS = {
    "monday": MO, "mon": MO,
    "tuesday": TU, "tue": TU,
    "wednesday": WE, "wed": WE,
    "thursday": TH, "thu": TH,
    "friday": FR, "fri": FR,
    "saturday": SA, "sat": SA,
    "sunday": SU, "sun": SU,
}
_WEEKDAY_RE = re.compile(r"(next|last|previous)\s+([a-z]+)")

_MONTH_EDGE_RE = re.compile(r"(first|last) day of (this|next|last|previous) month")
_MONTH_SHIFT = {"this": 0, "next": 1, "last": -1, "previous": -1}


def _relative_offset(text: str) -> relativedelta | None:
    """Parse "+1 week 2 days" / "3 days ago" into a relativedelta."""
    ago = False
    if text.endswith(" ago"):
        ago = True
        text = text[: -len(" ago")].strip()
    if not _OFFSET_RE.fullmatch(text):
        return None

    delta = relativedelta()
    for sign, amount, unit in _TERM_RE.findall(text):
        value = int(amount) * (-1 if sign == "-" else 1)
        field = _UNITS[unit]
        if field == "fortnights":
            field, value = "weeks", value * 2
        delta += relativedelta(**{field: value})
    return -delta if ago else delta


def _keyword(text: str, now: datetime) -> datetime | None:
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    if text == "now":
        return now
    if text in ("midnight", "today"):
        return midnight
    if text == "noon":
        return midnight.replace(hour=12)
    if text == "tomorrow":
        return midnight + timedelta(days=1)
    if text == "yesterday":
        return midnight - timedelta(days=1)
    return None


def _relative_weekday(text: str, now: datetime) -> datetime | None:
    match = _WEEKDAY_RE.fullmatch(text)
    if not match or match.group(2) not in _WEEKDAYS:
        return None
    direction, name = match.groups()
    weekday = _WEEKDAYS[name]
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    if direction == "next":
        return midnight + relativedelta(days=+1, weekday=weekday(+1))
    return midnight + relativedelta(days=-1, weekday=weekday(-1))


def _month_edge(text: str, now: datetime) -> datetime | None:
    match = _MONTH_EDGE_RE.fullmatch(text)
    if not match:
        return None
    edge, which = match.groups()
    first = datetime.combine(now.date().replace(day=1), time.min, tzinfo=now.tzinfo)
    first += relativedelta(months=_MONTH_SHIFT[which])
    if edge == "first":
        return first
    return first.replace(day=days_in_month(first.year, first.month))


class ParsedDate(NamedTuple):
    """A parsed instant and whether the text named a whole calendar day."""
    value: datetime
    whole_day: bool


_WHOLE_DAY_KEYWORDS = {"midnight", "today", "tomorrow", "yesterday"}


def _relative(text: str, now: datetime) -> ParsedDate | None:
    result = _keyword(text, now)
    if result is not None:
        return ParsedDate(result, text in _WHOLE_DAY_KEYWORDS)

    for handler in (_relative_weekday, _month_edge):
        result = handler(text, now)
        if result is not None:
            return ParsedDate(result, True)

    offset = _relative_offset(text)
    if offset is not None:
        return ParsedDate(now + offset, False)
    return None


def _absolute(text: str, now: datetime) -> ParsedDate:
    # A second parse with a different default hour tells whether the text set a time
    midnight = datetime.combine(now.date(), time.min)
    try:
        parsed = dtparser.parse(text, default=midnight)
        whole_day = dtparser.parse(text, default=midnight.replace(hour=23)).hour != parsed.hour
    except (ValueError, OverflowError) as exc:
        logger.warning("Unparsable date string %r: %s", text, exc)
        raise InvalidDateError(text, reason="unrecognized date format") from exc

    if parsed.tzinfo is None:
        return ParsedDate(parsed.replace(tzinfo=now.tzinfo), whole_day)
    return ParsedDate(parsed.astimezone(now.tzinfo), whole_day)


def parse_date_descriptor(text: str, now: datetime) -> ParsedDate:
    """Parse a free-form date string relative to ``now``.

    Args:
        text: Date/time expression supplied by the caller
        now: Timezone-aware reference instant; its tzinfo is the store timezone

    Returns:
        ParsedDate with an aware datetime in the timezone of ``now``. Missing
        date fields are taken from ``now``, missing time fields default to
        midnight and mark the result as a whole day.

    Raises:
        InvalidDateError: If the string cannot be understood or falls outside
            the representable date range
        ValueError: If ``now`` is naive
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    normalized = " ".join(text.strip().lower().split())
    if not normalized:
        raise InvalidDateError(text, reason="empty date string")

    try:
        result = _relative(normalized, now)
        if result is None:
            result = _absolute(text.strip(), now)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateError(text, reason="date out of range") from exc
    return result


def parse_date_string(text: str, now: datetime) -> datetime:
    """Parse a free-form date string relative to ``now`` into an aware datetime."""
    return parse_date_descriptor(text, now).value
