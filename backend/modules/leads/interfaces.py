"""
Leads module interfaces.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Lead, CreateLeadRequest


@runtime_checkable
class ILeadRepository(Protocol):
    """Persistence contract for leads. Emails are unique."""

    def create(self, first_name: str, email: str, source: str) -> Lead:
        ...

    def get_by_email(self, email: str) -> Optional[Lead]:
        ...

    def mark_converted(self, email: str) -> bool:
        """Flag the lead with this email as converted. False if there is none."""
        ...

    def list_all(self) -> list[Lead]:
        ...

    def count(self) -> int:
        ...


@runtime_checkable
class ILeadService(Protocol):
    """Interface for lead capture, used by the landing page and the order recorder."""

    async def create_lead(self, request: CreateLeadRequest) -> Lead:
        """
        Raises:
            DuplicateLeadError: If the email was already captured
        """
        ...

    async def convert_lead(self, email: str) -> bool:
        """Mark the lead with this email as converted. No-op when there is none."""
        ...

    async def list_leads(self) -> list[Lead]:
        ...

    async def count_leads(self) -> int:
        ...
