"""
Base exception classes for the DigitalPro backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API
layer maps each base class to one HTTP status.
"""

from typing import Optional, Any


class DigitalProError(Exception):
    """
    Base exception for all DigitalPro errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(DigitalProError):
    """Resource not found."""

    pass


class ValidationError(DigitalProError):
    """Input validation failed."""

    pass


class AuthenticationError(DigitalProError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(DigitalProError):
    """Authorization failed (authenticated, but not allowed)."""

    pass


class ConflictError(DigitalProError):
    """The request conflicts with existing state (e.g., duplicate email)."""

    pass


class StorageError(DigitalProError):
    """The backing data store failed to complete an operation."""

    pass


class ExternalServiceError(DigitalProError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
