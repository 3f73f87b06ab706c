"""
User repositories.

UserRepository persists users in the Supabase `users` table;
InMemoryUserRepository keeps them in a dict for local development and tests.
Both satisfy IUserRepository and are selected by `settings.storage_backend`.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, parse_timestamp
from .exceptions import EmailAlreadyRegisteredError
from .models import User, OAuthProvider, oauth_column

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively and stored lower-cased."""
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for deciding who may change what.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("email", normalize_email(email)).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_oauth_id(self, provider: OAuthProvider, provider_user_id: str) -> Optional[User]:
        result = (
            self._db.table("users")
            .select("*")
            .eq(oauth_column(provider), provider_user_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user row.

        Uniqueness of the email is enforced by the table's unique index,
        so concurrent registrations for one address cannot both succeed.
        """
        row = {**data, "email": normalize_email(data["email"])}
        try:
            result = self._db.table("users").insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(row["email"]) from e
            raise
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        row = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._db.table("users").update(row).eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def count(self) -> int:
        result = self._db.table("users").select("id", count="exact").execute()
        return result.count or 0

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data.get("password_hash"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            profile_image_url=data.get("profile_image_url"),
            google_id=data.get("google_id"),
            github_id=data.get("github_id"),
            stripe_customer_id=data.get("stripe_customer_id"),
            stripe_subscription_id=data.get("stripe_subscription_id"),
            has_paid=bool(data.get("has_paid", False)),
            is_admin=bool(data.get("is_admin", False)),
            is_verified=bool(data.get("is_verified", False)),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )


class InMemoryUserRepository:
    """
    In-memory user storage.

    For testing and development. Use UserRepository for production.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = normalize_email(email)
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def get_by_oauth_id(self, provider: OAuthProvider, provider_user_id: str) -> Optional[User]:
        for user in self._users.values():
            if user.oauth_id(provider) == provider_user_id:
                return user
        return None

    def create(self, data: dict[str, Any]) -> User:
        email = normalize_email(data["email"])
        if self.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        now = datetime.now(timezone.utc)
        user = User(
            **{
                **data,
                "id": str(uuid.uuid4()),
                "email": email,
                "created_at": now,
                "updated_at": now,
            }
        )
        self._users[user.id] = user
        return user

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(
            update={**data, "updated_at": datetime.now(timezone.utc)}
        )
        self._users[user_id] = updated
        return updated

    def count(self) -> int:
        return len(self._users)
