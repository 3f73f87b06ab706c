"""
Order API endpoints.

POST /orders and POST /mark-paid let an authenticated client report its
own payment. They are only served while `allow_client_payment_confirmation`
is on; with it off, payments are confirmed by the Stripe webhook alone.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_order_service
from api.middleware.auth import get_current_user, require_admin
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import ClientPaymentConfirmationDisabledError
from .interfaces import IOrderService
from .models import (
    CreateOrderRequest,
    MarkPaidResponse,
    Order,
    SalesStats,
    UpdateOrderStatusRequest,
)

router = APIRouter()


def require_client_confirmation() -> None:
    """Dependency that rejects client-reported payments when they are disabled."""
    if not get_settings().allow_client_payment_confirmation:
        raise ClientPaymentConfirmationDisabledError()


@router.post("/orders", response_model=Order, status_code=201)
async def create_order(
    request: CreateOrderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    _: None = Depends(require_client_confirmation),
    service: IOrderService = Depends(get_order_service),
) -> Order:
    """
    Record a completed order for the caller.

    The amount is the one reported for the payment, not the product's
    current price.
    """
    return await service.record_completed_order(
        user.id,
        request.product_id,
        request.amount,
        request.external_payment_ref,
    )


@router.post("/mark-paid", response_model=MarkPaidResponse)
async def mark_paid(
    user: AuthenticatedUser = Depends(get_current_user),
    _: None = Depends(require_client_confirmation),
    service: IOrderService = Depends(get_order_service),
) -> MarkPaidResponse:
    """
    Grant the caller the global unlock.
    """
    updated = await service.mark_user_paid(user.id)
    return MarkPaidResponse(success=True, user=updated.to_authenticated_user())


@router.get("/my-orders", response_model=list[Order])
async def list_my_orders(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> list[Order]:
    return await service.list_orders_for_user(user.id)


@router.get("/admin/orders", response_model=list[Order])
async def list_all_orders(
    admin: AuthenticatedUser = Depends(require_admin),
    service: IOrderService = Depends(get_order_service),
) -> list[Order]:
    return await service.list_all_orders()


@router.patch("/admin/orders/{order_id}", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IOrderService = Depends(get_order_service),
) -> Order:
    """
    Change an order's status (admin).

    Moving an order to 'refunded' revokes the entitlement it granted
    on the next download attempt.
    """
    return await service.update_order_status(order_id, request.status)


@router.get("/admin/stats", response_model=SalesStats)
async def get_sales_stats(
    admin: AuthenticatedUser = Depends(require_admin),
    service: IOrderService = Depends(get_order_service),
) -> SalesStats:
    return await service.get_sales_stats()
