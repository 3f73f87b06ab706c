"""
Identity module.

Handles user records, local password credentials and OAuth account linking.

Public API:
- IIdentityService: Interface for identity operations
- IUserRepository: Persistence contract for user rows
- IOAuthClient: Google / GitHub authorization-code flow (HttpOAuthClient in oauth.py)
- User: Full user record (internal; never returned from endpoints)
- RegisterRequest / LoginRequest / OAuthProfile: Request payloads
- Identity exceptions: InvalidCredentialsError, EmailAlreadyRegisteredError, UserNotFoundError
"""

from .interfaces import IIdentityService, IOAuthClient, IUserRepository
from .models import User, RegisterRequest, LoginRequest, OAuthProvider, OAuthProfile
from .exceptions import (
    InvalidCredentialsError,
    EmailAlreadyRegisteredError,
    UserNotFoundError,
    OAuthProviderNotConfiguredError,
    OAuthExchangeError,
)

__all__ = [
    # Interfaces
    "IIdentityService",
    "IUserRepository",
    "IOAuthClient",
    # Models
    "User",
    "RegisterRequest",
    "LoginRequest",
    "OAuthProvider",
    "OAuthProfile",
    # Exceptions
    "InvalidCredentialsError",
    "EmailAlreadyRegisteredError",
    "UserNotFoundError",
    "OAuthProviderNotConfiguredError",
    "OAuthExchangeError",
]
