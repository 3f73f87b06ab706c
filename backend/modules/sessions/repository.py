"""
Session stores.

SessionRepository persists sessions in the Supabase `sessions` table so they
survive restarts; InMemorySessionStore is for local development and tests.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository, parse_timestamp
from .models import Session


class SessionRepository(BaseRepository[Session]):
    """Repository for the `sessions` table (sid, user_id, expire, created_at)."""

    def save(self, session: Session) -> None:
        self._db.table("sessions").insert(
            {
                "sid": session.token_digest,
                "user_id": session.user_id,
                "created_at": session.created_at.isoformat(),
                "expire": session.expires_at.isoformat(),
            }
        ).execute()

    def get(self, token_digest: str) -> Optional[Session]:
        result = self._db.table("sessions").select("*").eq("sid", token_digest).execute()
        if not result.data:
            return None
        return self._map_to_session(result.data[0])

    def delete(self, token_digest: str) -> None:
        self._db.table("sessions").delete().eq("sid", token_digest).execute()

    def delete_expired(self, now: datetime) -> int:
        result = self._db.table("sessions").delete().lte("expire", now.isoformat()).execute()
        return len(result.data or [])

    def _map_to_session(self, data: dict[str, Any]) -> Session:
        """Map database row to Session model."""
        return Session(
            token_digest=data["sid"],
            user_id=str(data["user_id"]),
            created_at=parse_timestamp(data["created_at"]),
            expires_at=parse_timestamp(data["expire"]),
        )


class InMemorySessionStore:
    """
    In-memory session storage.

    For testing and development. Sessions are lost on restart; use
    SessionRepository for production.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def save(self, session: Session) -> None:
        self._sessions[session.token_digest] = session

    def get(self, token_digest: str) -> Optional[Session]:
        return self._sessions.get(token_digest)

    def delete(self, token_digest: str) -> None:
        self._sessions.pop(token_digest, None)

    def delete_expired(self, now: datetime) -> int:
        expired = [d for d, s in self._sessions.items() if s.is_expired(now)]
        for digest in expired:
            del self._sessions[digest]
        return len(expired)
