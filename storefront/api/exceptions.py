"""Custom exceptions for the Storefront API.

Defines specific exception types for better error handling and reporting.
Every exception carries the HTTP status code the application responds with.
"""

from typing import Any, Dict, Optional


class StorefrontException(Exception):
    """Base exception for Storefront errors."""

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


class ValidationError(StorefrontException):
    """Raised when required request fields are missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class ConflictError(StorefrontException):
    """Raised when a record with the same unique key already exists."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class UnauthorizedError(StorefrontException):
    """Raised when login credentials do not match any user."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message=message, status_code=401)


class NotFoundError(StorefrontException):
    """Raised when a record id is not present in its store."""

    def __init__(self, resource: str, record_id: str):
        super().__init__(
            message=f"{resource} not found",
            status_code=404,
            details={"id": record_id},
        )


class MalformedStoreError(StorefrontException):
    """Raised when a store file does not contain a JSON array."""

    def __init__(self, path: str, error: Exception):
        message = f"Store file '{path}' is corrupt: {str(error)}"
        super().__init__(
            message=message,
            status_code=500,
            details={
                "path": path,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )


class StoreWriteError(StorefrontException):
    """Raised when a store file cannot be written."""

    def __init__(self, path: str, error: Exception):
        message = f"Failed to save store file '{path}': {str(error)}"
        super().__init__(
            message=message,
            status_code=500,
            details={
                "path": path,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )
