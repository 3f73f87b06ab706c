"""
Identity service implementation.

Owns user records and the local credential check. Session issuance lives
in the sessions module; this service only answers "who is this".
"""

import logging
from typing import Any, Optional

from .exceptions import InvalidCredentialsError, UserNotFoundError
from .interfaces import IIdentityService, IUserRepository
from .models import User, RegisterRequest, OAuthProfile, oauth_column
from .passwords import hash_password, verify_password, dummy_verify

logger = logging.getLogger(__name__)


class IdentityService(IIdentityService):
    """
    Implementation of the identity service on top of an IUserRepository.
    """

    def __init__(self, repository: IUserRepository):
        self._users = repository

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return self._users.get_by_email(email)

    async def create_user(self, fields: dict[str, Any]) -> User:
        return self._users.create(fields)

    async def register(self, request: RegisterRequest) -> User:
        """Register a local account. The plaintext password is never stored."""
        user = await self.create_user(
            {
                "email": request.email,
                "password_hash": hash_password(request.password),
                "first_name": request.first_name,
                "last_name": request.last_name,
            }
        )
        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Verify an email/password pair.

        All failure paths raise the same InvalidCredentialsError. An unknown
        email still pays for one hash verification.
        """
        user = self._users.get_by_email(email)
        if user is None:
            dummy_verify()
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user

    async def login_with_oauth(self, profile: OAuthProfile) -> User:
        """
        Resolve the user behind an OAuth sign-in.

        Lookup order: linked provider id, then an existing account with
        the same email (which gets linked), then a new verified account.
        """
        user = self._users.get_by_oauth_id(profile.provider, profile.provider_user_id)
        if user is not None:
            return user

        column = oauth_column(profile.provider)
        existing = self._users.get_by_email(profile.email)
        if existing is not None:
            update: dict[str, Any] = {column: profile.provider_user_id}
            if profile.profile_image_url:
                update["profile_image_url"] = profile.profile_image_url
            linked = self._users.update(existing.id, update)
            if linked is None:
                raise UserNotFoundError(existing.id)
            logger.info("Linked %s account to user %s", profile.provider.value, linked.id)
            return linked

        return await self.create_user(
            {
                "email": profile.email,
                "first_name": profile.first_name,
                "last_name": profile.last_name,
                "profile_image_url": profile.profile_image_url,
                column: profile.provider_user_id,
                "is_verified": True,
            }
        )

    async def update_payment_customer(
        self,
        user_id: str,
        customer_id: str,
        subscription_id: Optional[str] = None,
    ) -> User:
        update: dict[str, Any] = {"stripe_customer_id": customer_id}
        if subscription_id is not None:
            update["stripe_subscription_id"] = subscription_id
        user = self._users.update(user_id, update)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def set_admin(self, user_id: str, is_admin: bool) -> User:
        """Grant or revoke catalog administration."""
        user = self._users.update(user_id, {"is_admin": is_admin})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("Set is_admin=%s for user %s", is_admin, user_id)
        return user
