"""Custom exception hierarchy for StoreStats.

Every error raised by the reporting helpers derives from StoreStatsException so
the report layer can catch one base class and hand the payload from
``to_dict()`` straight to the user-facing layer.

Error codes follow pattern: [CATEGORY][NUMBER]
- DATE: Date and period errors (001-099)
- SYS: System/configuration errors (400-499)
"""

from __future__ import annotations

from typing import Any


class StoreStatsException(Exception):
    """Base exception for all StoreStats application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-friendly message and metadata.

        Args:
            message: User-friendly error message
            code: Unique error code (e.g., "DATE001")
            status_code: HTTP-style status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response payload format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# DATE ERRORS (DATE001-099)
# ============================================================================

class DateError(StoreStatsException):
    """Base class for date and reporting period errors."""
    pass


class InvalidDateError(DateError):
    """A period descriptor could not be recognized or parsed.

    ``value`` keeps the raw input exactly as the caller passed it.
    """

    def __init__(self, value: Any, reason: str | None = None):
        message = f"Improper date provided: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message=message,
            code="DATE001",
            status_code=400,
            details={"date": str(value), "reason": reason},
        )
        self.value = value
        self.reason = reason


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class SystemError(StoreStatsException):
    """Base class for system/configuration errors."""
    pass


class ConfigurationError(SystemError):
    """Application configuration is invalid or missing."""

    def __init__(self, parameter: str, reason: str | None = None):
        message = f"Configuration error: {parameter} is not configured properly"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            code="SYS401",
            status_code=500,
            details={"parameter": parameter, "reason": reason},
        )
