"""
Custom exceptions for the logging pipeline.
"""

from typing import Iterable


class LoggingError(Exception):
    """
    Base exception for errors raised while producing log entries.

    - message: human-friendly description of the failure
    - fields: optional list of structured field keys related to the error (e.g. ['payload'])
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None

    def __str__(self) -> str:
        if self.fields:
            return f"{self.message} (fields: {', '.join(self.fields)})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error.
        Used by the sink when it writes a fallback entry in place of the failed one.
        """
        payload = {"error": self.message}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class SerializationError(LoggingError):
    """Raised when a structured field value cannot be encoded as JSON."""

    def __init__(self, message: str = "field value is not JSON serializable", *,
                 fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)
