"""Exceptions raised by the product analytics operations."""

from typing import Any, Dict, Optional


class AnalyticsError(Exception):
    """Base exception for analytics errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class InvalidArgumentError(AnalyticsError):
    """Raised when an operation receives a parameter outside its domain."""

    def __init__(self, parameter: str, message: str, value: Any = None):
        super().__init__(
            message=message,
            status_code=400,
            details={"parameter": parameter, "value": None if value is None else str(value)},
        )
        self.parameter = parameter
