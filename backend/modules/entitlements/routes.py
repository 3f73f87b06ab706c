"""
Entitlement API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_entitlement_service
from api.middleware.auth import get_current_user
from modules.catalog.models import Product
from shared.models import AuthenticatedUser

from .interfaces import IEntitlementService
from .models import EntitlementStatus

router = APIRouter()


@router.get("/entitlements/{product_id}", response_model=EntitlementStatus)
async def get_entitlement(
    product_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IEntitlementService = Depends(get_entitlement_service),
) -> EntitlementStatus:
    """
    Whether the caller may download a product, and why.

    Lets a client choose between "download" and "buy this".
    """
    grant = await service.resolve_grant(user.id, product_id)
    return EntitlementStatus(
        product_id=product_id,
        entitled=grant is not None,
        source=grant.source if grant else None,
    )


@router.get("/my-products", response_model=list[Product])
async def list_my_products(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IEntitlementService = Depends(get_entitlement_service),
) -> list[Product]:
    """
    Active products the caller may download.
    """
    return await service.list_entitled_products(user.id)
