"""
Identity module exceptions.

These exceptions are raised by the identity module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
)


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when an email/password pair does not authenticate.

    Unknown email and wrong password raise the same error with the same
    message so callers cannot enumerate registered addresses.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "User with this email already exists",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when an operation targets a user id that doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class OAuthProviderNotConfiguredError(NotFoundError):
    """Raised when sign-in is requested for a provider without credentials."""

    def __init__(self, provider: str):
        super().__init__(
            f"Sign-in with {provider} is not available",
            code="OAUTH_PROVIDER_NOT_CONFIGURED",
            details={"provider": provider},
        )


class OAuthExchangeError(ExternalServiceError):
    """The provider rejected the authorization code or returned no usable profile."""

    def __init__(self, provider: str, reason: str):
        super().__init__(
            f"Sign-in with {provider} failed: {reason}",
            service=provider,
            code="OAUTH_EXCHANGE_FAILED",
        )
