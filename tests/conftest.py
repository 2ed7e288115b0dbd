from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest

os.environ.setdefault("APP_ENV", "test")

from storestats.core.config import get_settings  # noqa: E402
from storestats.services.date_ranges import DateRangeResolver  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Keep settings built under monkeypatched env vars from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def resolver():
    """UTC resolver with Monday as the first day of the week."""
    return DateRangeResolver(week_start=1, timezone="UTC")


@pytest.fixture
def leap_day_now():
    """Thursday 2024-02-15 10:30 UTC, inside a leap-year February."""
    return datetime(2024, 2, 15, 10, 30, tzinfo=timezone.utc)
