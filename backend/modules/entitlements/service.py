"""
Entitlement resolver.

Two grant paths, OR-ed together:

1. Global unlock: admins and users with has_paid may download every
   active product.
2. Per order: among the user's orders for the product, the newest one in
   a settled status (completed or refunded) decides. Completed grants,
   refunded revokes. Pending and failed orders are ignored, so a failed
   retry never masks an earlier purchase and an old purchase never masks
   a later refund.

An inactive product is never downloadable.
"""

from typing import Optional

from modules.catalog.interfaces import IProductRepository
from modules.catalog.models import Product
from modules.identity.interfaces import IUserRepository
from modules.orders.interfaces import IOrderRepository
from modules.orders.models import Order, OrderStatus

from .interfaces import IEntitlementService
from .models import EntitlementGrant, GrantSource


def deciding_order(orders: list[Order]) -> Optional[Order]:
    """The newest settled order, or None. `orders` must be newest first."""
    for order in orders:
        if order.status.is_settled:
            return order
    return None


class EntitlementService(IEntitlementService):
    """
    Resolver reading users, products and orders straight from their stores.
    """

    def __init__(
        self,
        users: IUserRepository,
        products: IProductRepository,
        orders: IOrderRepository,
    ):
        self._users = users
        self._products = products
        self._orders = orders

    async def resolve_grant(self, user_id: str, product_id: str) -> Optional[EntitlementGrant]:
        product = self._products.get(product_id)
        if product is None or not product.is_active:
            return None

        user = self._users.get_by_id(user_id)
        if user is None:
            return None

        if user.is_admin:
            return EntitlementGrant(user_id=user_id, product_id=product_id, source=GrantSource.ADMIN)

        if user.has_paid:
            return EntitlementGrant(
                user_id=user_id, product_id=product_id, source=GrantSource.GLOBAL_UNLOCK
            )

        order = deciding_order(self._orders.list_for_user_product(user_id, product_id))
        if order is not None and order.status == OrderStatus.COMPLETED:
            return EntitlementGrant(
                user_id=user_id,
                product_id=product_id,
                source=GrantSource.ORDER,
                order_id=order.id,
            )

        return None

    async def can_download(self, user_id: str, product_id: str) -> bool:
        return await self.resolve_grant(user_id, product_id) is not None

    async def list_entitled_products(self, user_id: str) -> list[Product]:
        user = self._users.get_by_id(user_id)
        if user is None:
            return []

        products = self._products.list_products()
        if user.is_admin or user.has_paid:
            return products

        by_product: dict[str, list[Order]] = {}
        for order in self._orders.list_for_user(user_id):
            by_product.setdefault(order.product_id, []).append(order)

        entitled = []
        for product in products:
            order = deciding_order(by_product.get(product.id, []))
            if order is not None and order.status == OrderStatus.COMPLETED:
                entitled.append(product)
        return entitled
