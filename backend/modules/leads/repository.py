"""
Lead repositories.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from modules.identity.repository import normalize_email, UNIQUE_VIOLATION
from shared.repository import BaseRepository, parse_timestamp
from .exceptions import DuplicateLeadError
from .models import Lead


class LeadRepository(BaseRepository[Lead]):
    """Repository for the `leads` table."""

    def create(self, first_name: str, email: str, source: str) -> Lead:
        email = normalize_email(email)
        try:
            result = (
                self._db.table("leads")
                .insert({"first_name": first_name, "email": email, "source": source})
                .execute()
            )
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateLeadError(email) from e
            raise
        return self._map_to_lead(result.data[0])

    def get_by_email(self, email: str) -> Optional[Lead]:
        result = self._db.table("leads").select("*").eq("email", normalize_email(email)).execute()
        if not result.data:
            return None
        return self._map_to_lead(result.data[0])

    def mark_converted(self, email: str) -> bool:
        result = (
            self._db.table("leads")
            .update({"is_converted": True})
            .eq("email", normalize_email(email))
            .execute()
        )
        return bool(result.data)

    def list_all(self) -> list[Lead]:
        result = self._db.table("leads").select("*").order("created_at", desc=True).execute()
        return [self._map_to_lead(row) for row in result.data or []]

    def count(self) -> int:
        result = self._db.table("leads").select("id", count="exact").execute()
        return result.count or 0

    def _map_to_lead(self, data: dict[str, Any]) -> Lead:
        return Lead(
            id=str(data["id"]),
            first_name=data["first_name"],
            email=data["email"],
            source=data.get("source") or "landing_page",
            is_converted=bool(data.get("is_converted", False)),
            created_at=parse_timestamp(data["created_at"]),
        )


class InMemoryLeadRepository:
    """In-memory lead storage for testing and development."""

    def __init__(self) -> None:
        self._leads: dict[str, Lead] = {}

    def create(self, first_name: str, email: str, source: str) -> Lead:
        email = normalize_email(email)
        if email in self._leads:
            raise DuplicateLeadError(email)
        lead = Lead(
            id=str(uuid.uuid4()),
            first_name=first_name,
            email=email,
            source=source,
            created_at=datetime.now(timezone.utc),
        )
        self._leads[email] = lead
        return lead

    def get_by_email(self, email: str) -> Optional[Lead]:
        return self._leads.get(normalize_email(email))

    def mark_converted(self, email: str) -> bool:
        email = normalize_email(email)
        lead = self._leads.get(email)
        if lead is None:
            return False
        self._leads[email] = lead.model_copy(update={"is_converted": True})
        return True

    def list_all(self) -> list[Lead]:
        return sorted(self._leads.values(), key=lambda lead: lead.created_at, reverse=True)

    def count(self) -> int:
        return len(self._leads)
