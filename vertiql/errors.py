"""Custom exception hierarchy for vertiql.

All public errors inherit from VertiQLError so callers can catch the base
class for any vertiql-specific failure.  Transport errors raised by
SQLAlchemy while introspecting the base catalog are *not* wrapped; they
reach the caller verbatim.
"""
from __future__ import annotations

from typing import Any


class VertiQLError(Exception):
    """Base exception for all vertiql errors."""

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response for logging or API payloads."""
        return {
            "error": type(self).__name__,
            "message": str(self),
            "details": {},
        }


class ConfigurationError(VertiQLError):
    """Raised when the adapter is asked for something it cannot build.

    Detected when the expression is built, before any query is executed.

    Args:
        message: Human-readable description.
        setting: The offending setting or token, if any.
    """

    def __init__(self, message: str, setting: Any = None) -> None:
        super().__init__(message)
        self.setting = setting

    def to_error_response(self) -> dict[str, Any]:
        response = super().to_error_response()
        response["details"] = {"setting": self.setting}
        return response


class UnsupportedGranularityError(ConfigurationError):
    """Raised for a temporal granularity outside the supported set."""

    def __init__(self, granularity: Any, supported: list[str] | None = None) -> None:
        super().__init__(
            f"Unsupported temporal granularity: {granularity!r}.",
            setting=granularity,
        )
        self.granularity = granularity
        self.supported = supported or []


class InvalidOffsetError(ConfigurationError):
    """Raised when a date offset amount is not a whole number of units."""

    def __init__(self, amount: Any, unit: str) -> None:
        super().__init__(
            f"Date offset amount must be a whole number of {unit}s, got {amount!r}.",
            setting=amount,
        )
        self.amount = amount
        self.unit = unit


class ConnectionSpecError(VertiQLError):
    """Raised when connection parameters cannot identify a server.

    Args:
        message: Human-readable description.
        field: The connection field that could not be used.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_error_response(self) -> dict[str, Any]:
        response = super().to_error_response()
        response["details"] = {"field": self.field}
        return response


class SupplementaryFetchError(VertiQLError):
    """Describes a failed best-effort catalog query.

    Never raised out of :meth:`CatalogMerger.describe_database`; it travels
    inside a failed :class:`~vertiql.introspect.views.FetchResult`.

    Args:
        message: The underlying driver message.
        query: The SQL text that failed.
    """

    def __init__(self, message: str, query: str | None = None) -> None:
        super().__init__(message)
        self.query = query
