"""
Lead capture endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_lead_service
from api.middleware.auth import require_admin
from shared.models import AuthenticatedUser

from .interfaces import ILeadService
from .models import Lead, CreateLeadRequest

router = APIRouter()


@router.post("/leads", response_model=Lead, status_code=201)
async def create_lead(
    request: CreateLeadRequest,
    service: ILeadService = Depends(get_lead_service),
) -> Lead:
    """
    Capture a prospect's name and email from the landing page.

    Returns 409 if the email was already captured.
    """
    return await service.create_lead(request)


@router.get("/admin/leads", response_model=list[Lead])
async def list_leads(
    admin: AuthenticatedUser = Depends(require_admin),
    service: ILeadService = Depends(get_lead_service),
) -> list[Lead]:
    return await service.list_leads()
