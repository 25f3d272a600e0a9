"""
Domain Errors

Exceptions raised by the calendar, the prediction services and the
readings sources.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidPeriodError(DomainError):
    """Raised when a month or day is outside its valid range."""

    code = "INVALID_PERIOD"


class FuturePeriodError(DomainError):
    """Raised when a requested month or date lies after the current date."""

    code = "FUTURE_DATE"


class InsufficientDataError(DomainError):
    """Raised when there are not enough observations to project a period."""

    code = "INSUFFICIENT_DATA"

    def __init__(
        self,
        message: str,
        found: int = 0,
        required: int = 1,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.found = found
        self.required = required
        super().__init__(
            message, {"found": found, "required": required, **(details or {})}
        )


class ReadingsSourceError(DomainError):
    """Raised when the readings source cannot be queried."""

    code = "DATA_SOURCE_ERROR"


class NoReadingsError(DomainError):
    """Raised when the readings source holds nothing for the requested scope."""

    code = "NO_DATA"
