"""
Orders module interfaces.

The entitlement resolver reads orders through IOrderRepository; the HTTP
boundary and the payment webhook go through IOrderService.
"""

from decimal import Decimal
from typing import Protocol, Optional, Any, runtime_checkable

from modules.identity.models import User

from .models import Order, OrderStatus, SalesStats


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Persistence contract for orders.

    Implementations must enforce uniqueness of `external_payment_ref`
    atomically (raising DuplicateOrderError).
    """

    def get(self, order_id: str) -> Optional[Order]:
        ...

    def get_by_payment_ref(self, external_payment_ref: str) -> Optional[Order]:
        ...

    def create(self, data: dict[str, Any]) -> Order:
        ...

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        ...

    def list_for_user(self, user_id: str) -> list[Order]:
        """Orders of one user, newest first."""
        ...

    def list_for_user_product(self, user_id: str, product_id: str) -> list[Order]:
        """Orders for one (user, product) pair, newest first."""
        ...

    def list_all(self) -> list[Order]:
        """All orders, newest first."""
        ...


@runtime_checkable
class IOrderService(Protocol):
    """
    Interface for order operations.

    Recording what was bought and granting blanket access are separate
    operations: record_completed_order never touches has_paid.
    """

    async def record_completed_order(
        self,
        user_id: str,
        product_id: str,
        amount: Decimal,
        external_payment_ref: Optional[str] = None,
    ) -> Order:
        """
        Persist a confirmed payment as a completed order.

        Converts a lead with the buyer's email, best-effort.

        Raises:
            InvalidAmountError: If amount is negative
            UserNotFoundError: If the user doesn't exist
            ProductNotFoundError: If the product doesn't exist
            DuplicateOrderError: If the payment reference was already recorded
        """
        ...

    async def mark_user_paid(self, user_id: str) -> User:
        """
        Grant the global unlock (has_paid). Idempotent.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """
        Raises:
            OrderNotFoundError: If the order doesn't exist
            InvalidStatusTransitionError: If the change is not allowed
        """
        ...

    async def get_order_by_payment_ref(self, external_payment_ref: str) -> Optional[Order]:
        ...

    async def list_orders_for_user(self, user_id: str) -> list[Order]:
        ...

    async def list_all_orders(self) -> list[Order]:
        ...

    async def get_sales_stats(self) -> SalesStats:
        ...
