"""
Lead service implementation.
"""

import logging

from .interfaces import ILeadService, ILeadRepository
from .models import Lead, CreateLeadRequest

logger = logging.getLogger(__name__)


class LeadService(ILeadService):
    """Lead capture on top of an ILeadRepository."""

    def __init__(self, repository: ILeadRepository):
        self._leads = repository

    async def create_lead(self, request: CreateLeadRequest) -> Lead:
        lead = self._leads.create(request.first_name, request.email, request.source)
        logger.info("Captured lead %s from %s", lead.id, lead.source)
        return lead

    async def convert_lead(self, email: str) -> bool:
        converted = self._leads.mark_converted(email)
        if converted:
            logger.info("Converted lead for %s", email)
        return converted

    async def list_leads(self) -> list[Lead]:
        return self._leads.list_all()

    async def count_leads(self) -> int:
        return self._leads.count()
