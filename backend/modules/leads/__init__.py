"""
Leads module.

Landing-page email capture. A lead is marked converted when the same
email completes a purchase.
"""

from .interfaces import ILeadService, ILeadRepository
from .models import Lead, CreateLeadRequest
from .exceptions import DuplicateLeadError

__all__ = [
    "ILeadService",
    "ILeadRepository",
    "Lead",
    "CreateLeadRequest",
    "DuplicateLeadError",
]
