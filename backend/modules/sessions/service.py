"""
Session service implementation.

Sessions are opaque server-side tokens with a FIXED lifetime (default
7 days from issuance). Resolving a session never extends it.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from modules.identity.interfaces import IUserRepository
from modules.identity.models import User

from .interfaces import ISessionService, ISessionStore
from .models import Session, SessionToken

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)

# 32 bytes of entropy -> 43 url-safe characters
TOKEN_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def digest_token(token: str) -> str:
    """Storage key for a token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionService(ISessionService):
    """
    Session manager backed by an ISessionStore.

    The user is re-read from the identity store on every resolve, so flag
    changes (admin demotion, has_paid) take effect on the next request.
    """

    def __init__(
        self,
        store: ISessionStore,
        users: IUserRepository,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._users = users
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def create_session(self, user: User) -> SessionToken:
        token = secrets.token_urlsafe(TOKEN_BYTES)
        now = self._clock()
        session = Session(
            token_digest=digest_token(token),
            user_id=user.id,
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._store.save(session)
        return SessionToken(token=token, user_id=user.id, expires_at=session.expires_at)

    async def resolve_session(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None

        digest = digest_token(token)
        session = self._store.get(digest)
        if session is None:
            return None

        if session.is_expired(self._clock()):
            self._store.delete(digest)
            return None

        user = self._users.get_by_id(session.user_id)
        if user is None:
            logger.warning("Session references missing user %s", session.user_id)
            self._store.delete(digest)
        return user

    async def destroy_session(self, token: Optional[str]) -> None:
        if not token:
            return
        self._store.delete(digest_token(token))

    async def purge_expired(self) -> int:
        """Remove expired sessions from the store."""
        removed = self._store.delete_expired(self._clock())
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed
