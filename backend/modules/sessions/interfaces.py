"""
Sessions module interfaces.

The HTTP boundary depends on ISessionService; the service depends on an
ISessionStore, which any durable store with read-after-write consistency
can implement.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from modules.identity.models import User

from .models import Session, SessionToken


@runtime_checkable
class ISessionStore(Protocol):
    """Durable opaque-token store."""

    def save(self, session: Session) -> None:
        ...

    def get(self, token_digest: str) -> Optional[Session]:
        ...

    def delete(self, token_digest: str) -> None:
        """Delete one session. Deleting a missing session is not an error."""
        ...

    def delete_expired(self, now: datetime) -> int:
        """Delete every session expired at `now`. Returns the number removed."""
        ...


@runtime_checkable
class ISessionService(Protocol):
    """
    Interface for session operations.

    State machine per token: Anonymous -> (create) -> Authenticated ->
    (destroy | expiry) -> Anonymous.
    """

    async def create_session(self, user: User) -> SessionToken:
        """
        Issue a new session for a user.

        Other sessions of the same user are unaffected.
        """
        ...

    async def resolve_session(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a token to its user.

        Returns None for a missing, unknown or expired token, or when the
        user no longer exists. Never raises for those cases.
        """
        ...

    async def destroy_session(self, token: Optional[str]) -> None:
        """End one session. Idempotent."""
        ...
