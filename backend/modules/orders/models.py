"""
Orders module data models.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from shared.models import AuthenticatedUser


class OrderStatus(str, Enum):
    """
    Lifecycle of an order.

    Only COMPLETED grants entitlement. COMPLETED and REFUNDED are the
    settled states that decide entitlement; PENDING and FAILED never do.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    @property
    def is_settled(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.REFUNDED)


# Allowed status changes. Setting the current status again is a no-op.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.COMPLETED, OrderStatus.FAILED}),
    OrderStatus.COMPLETED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.FAILED: frozenset({OrderStatus.PENDING, OrderStatus.COMPLETED}),
    OrderStatus.REFUNDED: frozenset(),
}


class Order(BaseModel):
    """
    A recorded payment for one product by one user.

    `amount` is what was actually charged, not the product's price at
    any later time.
    """

    id: str = Field(..., description="Order ID (UUID)")
    user_id: str
    product_id: str
    amount: Decimal = Field(..., ge=0)
    status: OrderStatus
    external_payment_ref: Optional[str] = Field(
        None, description="Payment processor reference (Stripe payment intent id)"
    )
    created_at: datetime
    updated_at: datetime


class CreateOrderRequest(BaseModel):
    """
    Client-reported payment confirmation.

    Accepts the camelCase keys sent by the storefront as well as snake_case.
    """

    product_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("productId", "product_id"),
    )
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    external_payment_ref: Optional[str] = Field(
        None,
        min_length=1,
        validation_alias=AliasChoices("externalPaymentRef", "paymentIntentId", "external_payment_ref"),
    )


class UpdateOrderStatusRequest(BaseModel):
    """Admin request to move an order to another status."""

    status: OrderStatus


class MarkPaidResponse(BaseModel):
    """Response of POST /api/mark-paid."""

    success: bool = True
    user: AuthenticatedUser


class SalesStats(BaseModel):
    """Admin dashboard totals."""

    total_sales: Decimal = Field(..., description="Sum of completed order amounts")
    total_orders: int
    completed_orders: int
    refunded_orders: int
    total_customers: int
    total_leads: int
