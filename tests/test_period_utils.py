"""Tests for period calendar arithmetic."""
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from storestats.models.schemas.date_range import PredefinedPeriod
from storestats.services.date_ranges.period_utils import (
    calculate_period_range,
    day_end_timestamp,
    day_start_timestamp,
    days_in_month,
    month_bounds,
    quarter_bounds,
    week_bounds,
)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),
        (2000, 2, 29),
        (2024, 4, 30),
        (2024, 12, 31),
    ],
)
def test_days_in_month(year, month, expected):
    """Month lengths follow the Gregorian leap-year rules."""
    assert days_in_month(year, month) == expected


def test_month_bounds():
    """Month bounds run from day 1 to the last day."""
    assert month_bounds(2023, 11) == (date(2023, 11, 1), date(2023, 11, 30))


@pytest.mark.parametrize(
    "month, expected",
    [
        (1, (date(2024, 1, 1), date(2024, 3, 31))),
        (3, (date(2024, 1, 1), date(2024, 3, 31))),
        (4, (date(2024, 4, 1), date(2024, 6, 30))),
        (8, (date(2024, 7, 1), date(2024, 9, 30))),
        (12, (date(2024, 10, 1), date(2024, 12, 31))),
    ],
)
def test_quarter_bounds(month, expected):
    """Quarters are fixed three-month blocks."""
    assert quarter_bounds(2024, month) == expected


def test_week_bounds_monday_start():
    """Sunday belongs to the week that started the previous Monday."""
    assert week_bounds(date(2024, 2, 18), 1) == (date(2024, 2, 12), date(2024, 2, 18))


def test_week_bounds_sunday_start():
    """With Sunday as week start a Sunday opens its own week."""
    assert week_bounds(date(2024, 2, 18), 0) == (date(2024, 2, 18), date(2024, 2, 24))


def test_week_bounds_cross_year():
    """A week can start in the previous year."""
    assert week_bounds(date(2025, 1, 1), 1) == (date(2024, 12, 30), date(2025, 1, 5))


def test_calculate_period_range_accepts_enum_and_name():
    """Both enum members and plain names are accepted."""
    today = date(2024, 5, 20)

    assert calculate_period_range(PredefinedPeriod.LAST_MONTH, today) == (date(2024, 4, 1), date(2024, 4, 30))
    assert calculate_period_range("last_month", today) == (date(2024, 4, 1), date(2024, 4, 30))


def test_calculate_period_range_last_quarter_from_q4():
    """last_quarter in Q4 is Q3 of the same year."""
    assert calculate_period_range("last_quarter", date(2024, 11, 2)) == (date(2024, 7, 1), date(2024, 9, 30))


def test_calculate_period_range_invalid():
    """Unknown period names raise ValueError."""
    with pytest.raises(ValueError, match="Invalid period"):
        calculate_period_range("next_decade", date(2024, 1, 1))


def test_day_timestamps_utc():
    """Day boundaries are midnight and 23:59:59."""
    tz = ZoneInfo("UTC")

    assert day_start_timestamp(date(2024, 2, 29), tz) == int(datetime(2024, 2, 29, tzinfo=timezone.utc).timestamp())
    assert day_end_timestamp(date(2024, 2, 29), tz) == int(
        datetime(2024, 2, 29, 23, 59, 59, tzinfo=timezone.utc).timestamp()
    )


def test_day_timestamps_on_dst_change():
    """A 23-hour DST day still ends at local 23:59:59."""
    tz = ZoneInfo("Europe/Berlin")
    day = date(2024, 3, 31)

    start = day_start_timestamp(day, tz)
    end = day_end_timestamp(day, tz)

    assert end - start == 23 * 3600 - 1
