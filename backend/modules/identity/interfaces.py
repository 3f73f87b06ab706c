"""
Identity module interfaces.

Other modules should depend on IIdentityService (or, for raw row access,
IUserRepository), not the concrete implementations. This enables testing
with the in-memory store and swapping the storage backend by configuration.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import User, RegisterRequest, OAuthProvider, OAuthProfile


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for user records.

    Implementations must enforce email uniqueness atomically and
    apply updates as single-row writes.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def get_by_oauth_id(self, provider: OAuthProvider, provider_user_id: str) -> Optional[User]:
        ...

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user row.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """
        ...

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        """Update columns of one user. Returns None if the user doesn't exist."""
        ...

    def count(self) -> int:
        ...


@runtime_checkable
class IIdentityService(Protocol):
    """
    Interface for identity operations.

    This protocol defines the contract that the identity module exposes
    to the session layer, the HTTP boundary and the order recorder.
    """

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Returns:
            User if found, None otherwise
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by email (case-insensitive).

        Returns:
            User if found, None otherwise
        """
        ...

    async def create_user(self, fields: dict[str, Any]) -> User:
        """
        Create a user from raw fields.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """
        ...

    async def register(self, request: RegisterRequest) -> User:
        """
        Register a local account, hashing the password.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """
        ...

    async def authenticate(self, email: str, password: str) -> User:
        """
        Verify an email/password pair.

        Raises:
            InvalidCredentialsError: Unknown email, no password set, or mismatch
        """
        ...

    async def login_with_oauth(self, profile: OAuthProfile) -> User:
        """
        Resolve (or create) the user behind an OAuth sign-in.

        Links the provider id to an existing account with the same email.
        """
        ...

    async def update_payment_customer(
        self,
        user_id: str,
        customer_id: str,
        subscription_id: Optional[str] = None,
    ) -> User:
        """
        Store payment-processor references for a user.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def set_admin(self, user_id: str, is_admin: bool) -> User:
        """
        Grant or revoke catalog administration.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...


@runtime_checkable
class IOAuthClient(Protocol):
    """
    Authorization-code flow against an external identity provider.
    """

    def is_configured(self, provider: OAuthProvider) -> bool:
        ...

    def authorization_url(self, provider: OAuthProvider, state: str, redirect_uri: str) -> str:
        """
        Provider consent URL that redirects back to redirect_uri with code and state.

        Raises:
            OAuthProviderNotConfiguredError: The provider has no credentials
        """
        ...

    async def fetch_profile(self, provider: OAuthProvider, code: str, redirect_uri: str) -> OAuthProfile:
        """
        Exchange an authorization code for the user's profile.

        Raises:
            OAuthExchangeError: The provider call failed or returned no usable profile
        """
        ...
