"""
Order service implementation.

Records confirmed payments as orders and applies the two downstream
effects: lead conversion (best-effort) and, as a separate explicit
operation, the global unlock.
"""

import logging
from decimal import Decimal
from typing import Optional

from modules.catalog.exceptions import ProductNotFoundError
from modules.catalog.interfaces import IProductRepository
from modules.identity.exceptions import UserNotFoundError
from modules.identity.interfaces import IUserRepository
from modules.identity.models import User
from modules.leads.interfaces import ILeadService

from .exceptions import (
    DuplicateOrderError,
    InvalidAmountError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from .interfaces import IOrderService, IOrderRepository
from .models import ALLOWED_TRANSITIONS, Order, OrderStatus, SalesStats

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderService(IOrderService):
    """
    Order recorder.

    Args:
        orders: Order persistence
        products: Product lookups (orders may reference inactive products)
        users: User rows; has_paid is flipped here
        leads: Lead conversion collaborator
    """

    def __init__(
        self,
        orders: IOrderRepository,
        products: IProductRepository,
        users: IUserRepository,
        leads: ILeadService,
    ):
        self._orders = orders
        self._products = products
        self._users = users
        self._leads = leads

    async def record_completed_order(
        self,
        user_id: str,
        product_id: str,
        amount: Decimal,
        external_payment_ref: Optional[str] = None,
    ) -> Order:
        amount = Decimal(amount)
        if not amount.is_finite() or amount < 0:
            raise InvalidAmountError(amount, "Amount must be a non-negative number")

        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if self._products.get(product_id) is None:
            raise ProductNotFoundError(product_id)

        if external_payment_ref and self._orders.get_by_payment_ref(external_payment_ref):
            raise DuplicateOrderError(external_payment_ref)

        order = self._orders.create(
            {
                "user_id": user_id,
                "product_id": product_id,
                "amount": amount.quantize(CENT),
                "status": OrderStatus.COMPLETED,
                "external_payment_ref": external_payment_ref,
            }
        )
        logger.info(
            "Recorded order %s: user %s bought product %s for %s",
            order.id, user_id, product_id, order.amount,
        )

        try:
            await self._leads.convert_lead(user.email)
        except Exception:
            logger.exception("Lead conversion failed for order %s", order.id)

        return order

    async def mark_user_paid(self, user_id: str) -> User:
        user = self._users.update(user_id, {"has_paid": True})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("Granted global unlock to user %s", user_id)
        return user

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if order.status == status:
            return order

        if status not in ALLOWED_TRANSITIONS[order.status]:
            raise InvalidStatusTransitionError(order_id, order.status.value, status.value)

        updated = self._orders.update_status(order_id, status)
        if updated is None:
            raise OrderNotFoundError(order_id)
        logger.info("Order %s: %s -> %s", order_id, order.status.value, status.value)
        return updated

    async def get_order(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    async def get_order_by_payment_ref(self, external_payment_ref: str) -> Optional[Order]:
        return self._orders.get_by_payment_ref(external_payment_ref)

    async def list_orders_for_user(self, user_id: str) -> list[Order]:
        return self._orders.list_for_user(user_id)

    async def list_all_orders(self) -> list[Order]:
        return self._orders.list_all()

    async def get_sales_stats(self) -> SalesStats:
        orders = self._orders.list_all()
        completed = [o for o in orders if o.status == OrderStatus.COMPLETED]
        return SalesStats(
            total_sales=sum((o.amount for o in completed), Decimal("0.00")),
            total_orders=len(orders),
            completed_orders=len(completed),
            refunded_orders=sum(1 for o in orders if o.status == OrderStatus.REFUNDED),
            total_customers=self._users.count(),
            total_leads=await self._leads.count_leads(),
        )
