from __future__ import annotations

import os
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storestats.models.schemas.date_range import PredefinedPeriod


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "StoreStats"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Store-local calendar used for day boundaries (IANA name)
    TIMEZONE: str = "UTC"
    # First day of the week: 0=Sunday .. 6=Saturday
    WEEK_START: int = 1
    # Period used when a report is requested without a start date
    DEFAULT_PERIOD: str = PredefinedPeriod.THIS_MONTH.value

    @field_validator("TIMEZONE")
    @classmethod
    def _validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @field_validator("WEEK_START", mode="before")
    @classmethod
    def _validate_week_start(cls, v):
        """Accept ints or numeric strings from the environment, 0-6 only."""
        value = int(v)
        if not 0 <= value <= 6:
            raise ValueError(f"WEEK_START must be between 0 (Sunday) and 6 (Saturday), got {value}")
        return value

    @field_validator("DEFAULT_PERIOD")
    @classmethod
    def _validate_default_period(cls, v: str) -> str:
        normalized = v.strip().lower()
        try:
            PredefinedPeriod(normalized)
        except ValueError as exc:
            raise ValueError(f"DEFAULT_PERIOD must be a predefined period, got {v!r}") from exc
        return normalized


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "DEBUG"


class TestSettings(BaseAppSettings):
    __test__ = False  # not a pytest test class

    ENV: str = "test"
    TIMEZONE: str = "UTC"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
