"""Tests for the StoreStats exception hierarchy."""
from storestats.core.exceptions import (
    ConfigurationError,
    DateError,
    InvalidDateError,
    StoreStatsException,
)


def test_invalid_date_error_payload():
    """InvalidDateError keeps the raw input and serializes it."""
    error = InvalidDateError("next blue moon", reason="unrecognized date format")

    assert isinstance(error, DateError)
    assert isinstance(error, StoreStatsException)
    assert error.value == "next blue moon"
    assert error.status_code == 400
    assert error.to_dict() == {
        "error": {
            "message": "Improper date provided: 'next blue moon' (unrecognized date format)",
            "code": "DATE001",
            "details": {"date": "next blue moon", "reason": "unrecognized date format"},
        }
    }


def test_invalid_date_error_without_reason():
    """The reason is optional."""
    error = InvalidDateError(["2024"])

    assert error.message == "Improper date provided: ['2024']"
    assert error.details["date"] == "['2024']"


def test_configuration_error():
    """ConfigurationError names the offending parameter."""
    error = ConfigurationError("week_start", "expected 0 (Sunday) to 6 (Saturday), got 9")

    assert error.code == "SYS401"
    assert error.status_code == 500
    assert "week_start" in error.message
    assert error.details == {"parameter": "week_start", "reason": "expected 0 (Sunday) to 6 (Saturday), got 9"}
