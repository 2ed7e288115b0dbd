"""Tests for application settings."""
import pytest
from pydantic import ValidationError

from storestats.core.config import BaseAppSettings, ProdSettings, TestSettings, get_settings


def test_defaults():
    """Defaults describe a UTC store with Monday weeks."""
    settings = BaseAppSettings()

    assert settings.TIMEZONE == "UTC"
    assert settings.WEEK_START == 1
    assert settings.DEFAULT_PERIOD == "this_month"


def test_environment_overrides(monkeypatch):
    """Settings are read from environment variables."""
    monkeypatch.setenv("WEEK_START", "0")
    monkeypatch.setenv("TIMEZONE", "Africa/Lagos")
    monkeypatch.setenv("DEFAULT_PERIOD", " Last_Month ")

    settings = TestSettings()

    assert settings.WEEK_START == 0
    assert settings.TIMEZONE == "Africa/Lagos"
    assert settings.DEFAULT_PERIOD == "last_month"


@pytest.mark.parametrize("value", ["7", "-1", "monday"])
def test_invalid_week_start(monkeypatch, value):
    """WEEK_START must be 0-6."""
    monkeypatch.setenv("WEEK_START", value)

    with pytest.raises(ValidationError):
        TestSettings()


def test_invalid_timezone(monkeypatch):
    """Unknown timezones are rejected."""
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValidationError):
        TestSettings()


def test_invalid_default_period(monkeypatch):
    """DEFAULT_PERIOD must name a predefined period."""
    monkeypatch.setenv("DEFAULT_PERIOD", "next_decade")

    with pytest.raises(ValidationError):
        TestSettings()


def test_get_settings_selects_environment(monkeypatch):
    """APP_ENV picks the settings class."""
    monkeypatch.setenv("APP_ENV", "production")

    settings = get_settings()

    assert isinstance(settings, ProdSettings)
    assert settings.LOG_FORMAT == "json"


def test_get_settings_is_cached(monkeypatch):
    """get_settings returns the same instance until the cache is cleared."""
    monkeypatch.setenv("APP_ENV", "test")

    assert get_settings() is get_settings()


def test_test_settings_not_collected_by_pytest():
    """TestSettings opts out of pytest class collection."""
    assert TestSettings.__test__ is False
    assert "__test__" not in TestSettings.model_fields
