"""Period date range calculation utilities.

Provides pure calendar arithmetic for the named reporting periods
(today, this_week, last_quarter, ...) and the conversion of calendar
days into inclusive start/end timestamps in the store timezone.
"""
import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Dict, Tuple

from dateutil.relativedelta import relativedelta

from storestats.models.schemas.date_range import PredefinedPeriod

END_OF_DAY = time(23, 59, 59)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` of ``year`` (Gregorian, leap years respected)."""
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def quarter_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of the calendar quarter containing ``month``.

    Quarters are fixed blocks: Jan-Mar, Apr-Jun, Jul-Sep, Oct-Dec.
    """
    first_month = ((month - 1) // 3) * 3 + 1
    start, _ = month_bounds(year, first_month)
    _, end = month_bounds(year, first_month + 2)
    return start, end


def week_bounds(today: date, week_start: int) -> Tuple[date, date]:
    """Seven-day week containing ``today``.

    Args:
        today: Reference day
        week_start: First day of the week, 0=Sunday .. 6=Saturday

    Returns:
        Tuple of (start_date, end_date) inclusive
    """
    # isoweekday() is 1=Monday .. 7=Sunday, so Sunday maps to 0 under mod 7
    offset = (today.isoweekday() - week_start) % 7
    start = today - timedelta(days=offset)
    return start, start + timedelta(days=6)


def _today(today: date, week_start: int) -> Tuple[date, date]:
    return today, today


def _yesterday(today: date, week_start: int) -> Tuple[date, date]:
    day = today - timedelta(days=1)
    return day, day


def _this_week(today: date, week_start: int) -> Tuple[date, date]:
    return week_bounds(today, week_start)


def _last_week(today: date, week_start: int) -> Tuple[date, date]:
    start, end = week_bounds(today, week_start)
    return start - timedelta(days=7), end - timedelta(days=7)


def _this_month(today: date, week_start: int) -> Tuple[date, date]:
    return month_bounds(today.year, today.month)


def _last_month(today: date, week_start: int) -> Tuple[date, date]:
    previous = today.replace(day=1) - relativedelta(months=1)
    return month_bounds(previous.year, previous.month)


def _this_quarter(today: date, week_start: int) -> Tuple[date, date]:
    return quarter_bounds(today.year, today.month)


def _last_quarter(today: date, week_start: int) -> Tuple[date, date]:
    start, _ = quarter_bounds(today.year, today.month)
    previous = start - relativedelta(months=3)
    return quarter_bounds(previous.year, previous.month)


def _this_year(today: date, week_start: int) -> Tuple[date, date]:
    return date(today.year, 1, 1), date(today.year, 12, 31)


def _last_year(today: date, week_start: int) -> Tuple[date, date]:
    return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)


PERIOD_RULES: Dict[PredefinedPeriod, Callable[[date, int], Tuple[date, date]]] = {
    PredefinedPeriod.TODAY: _today,
    PredefinedPeriod.YESTERDAY: _yesterday,
    PredefinedPeriod.THIS_WEEK: _this_week,
    PredefinedPeriod.LAST_WEEK: _last_week,
    PredefinedPeriod.THIS_MONTH: _this_month,
    PredefinedPeriod.LAST_MONTH: _last_month,
    PredefinedPeriod.THIS_QUARTER: _this_quarter,
    PredefinedPeriod.LAST_QUARTER: _last_quarter,
    PredefinedPeriod.THIS_YEAR: _this_year,
    PredefinedPeriod.LAST_YEAR: _last_year,
}


def calculate_period_range(period: PredefinedPeriod | str, today: date, week_start: int = 1) -> Tuple[date, date]:
    """Calculate start_date and end_date for a named period.

    Args:
        period: Predefined period name, e.g. 'last_quarter'
        today: Reference day in the store timezone
        week_start: First day of the week, 0=Sunday .. 6=Saturday

    Returns:
        Tuple of (start_date, end_date) inclusive

    Raises:
        ValueError: If the period name is unknown
    """
    try:
        rule = PERIOD_RULES[PredefinedPeriod(period)]
    except ValueError as e:
        raise ValueError(f"Invalid period: {period}") from e
    return rule(today, week_start)


def day_start_timestamp(day: date, tz: tzinfo) -> int:
    """Unix timestamp of 00:00:00 on ``day`` in ``tz``."""
    return int(datetime.combine(day, time.min, tzinfo=tz).timestamp())


def day_end_timestamp(day: date, tz: tzinfo) -> int:
    """Unix timestamp of 23:59:59 on ``day`` in ``tz``."""
    return int(datetime.combine(day, END_OF_DAY, tzinfo=tz).timestamp())
