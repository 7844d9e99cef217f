"""
Common exception classes for the JSON echo service.

This module defines custom exception classes used throughout the application
for better error handling and categorization.
"""

from __future__ import annotations

from json_echo.core.constants import INVALID_JSON_MESSAGE


class EchoServiceError(Exception):
    """Base exception class for all echo service errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message, sent to the client
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 500

    def to_dict(self) -> dict:
        return {"message": self.message}


class InvalidJSONError(EchoServiceError):
    """Raised when a request body cannot be decoded as JSON."""

    def __init__(
        self,
        message: str = INVALID_JSON_MESSAGE,
        details: dict | None = None,
    ):
        super().__init__(message, details, status_code=400)


class ConfigurationError(EchoServiceError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
    ):
        super().__init__(message, details, status_code=500)
