"""
Application exceptions.

Structured exception hierarchy so the API layer can turn failures into
consistent JSON error bodies.
"""

from typing import Any, Optional


class PeakboardError(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        code: str = 'PEAKBOARD_ERROR',
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {
            'error': self.message,
            'code': self.code,
            'details': self.details,
        }


class SourceUnavailable(PeakboardError):
    """
    The flight-log source could not be reached, timed out, or returned
    malformed data.

    Surfaced to the caller as-is; no retry happens below the caller.
    """

    def __init__(self, message: str, airport_code: Optional[str] = None):
        super().__init__(
            message=message,
            code='SOURCE_UNAVAILABLE',
            details={'airport_code': airport_code} if airport_code else None,
        )
        self.airport_code = airport_code


class BadRequest(PeakboardError, ValueError):
    """
    Caller-supplied input was rejected (blank airport code, unknown
    analysis type).

    Subclasses ValueError as well.
    """

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, code='BAD_REQUEST', details=details)
