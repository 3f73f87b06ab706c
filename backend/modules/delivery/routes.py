"""
Download API endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from api.dependencies import get_delivery_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IDeliveryService
from .models import Download

router = APIRouter()


@router.get(
    "/download/{product_id}",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"application/zip": {}}, "description": "The product archive"},
        401: {"description": "Not logged in"},
        403: {"description": "Not entitled to this product"},
        404: {"description": "Product file missing"},
    },
)
async def download_product(
    product_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeliveryService = Depends(get_delivery_service),
) -> StreamingResponse:
    """
    Stream a product archive to an entitled caller.

    The file is read in chunks; reading stops if the client disconnects.
    """
    delivery = await service.download(user.id, product_id)
    return StreamingResponse(
        delivery.chunks,
        media_type=delivery.media_type,
        headers={
            "Content-Disposition": delivery.content_disposition,
            "Content-Length": str(delivery.size),
        },
    )


@router.get("/my-downloads", response_model=list[Download])
async def list_my_downloads(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeliveryService = Depends(get_delivery_service),
) -> list[Download]:
    return await service.list_downloads(user.id)
