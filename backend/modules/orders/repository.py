"""
Order repositories.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, parse_timestamp
from .exceptions import DuplicateOrderError
from .models import Order, OrderStatus

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: (o.created_at, o.updated_at), reverse=True)


class OrderRepository(BaseRepository[Order]):
    """
    Repository for the `orders` table.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    def get(self, order_id: str) -> Optional[Order]:
        result = self._db.table("orders").select("*").eq("id", order_id).execute()
        if not result.data:
            return None
        return self._map_to_order(result.data[0])

    def get_by_payment_ref(self, external_payment_ref: str) -> Optional[Order]:
        result = (
            self._db.table("orders")
            .select("*")
            .eq("external_payment_ref", external_payment_ref)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_order(result.data[0])

    def create(self, data: dict[str, Any]) -> Order:
        row = dict(data)
        row["amount"] = str(row["amount"])
        if isinstance(row.get("status"), OrderStatus):
            row["status"] = row["status"].value
        try:
            result = self._db.table("orders").insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION and row.get("external_payment_ref"):
                raise DuplicateOrderError(row["external_payment_ref"]) from e
            raise
        return self._map_to_order(result.data[0])

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        result = (
            self._db.table("orders")
            .update(
                {
                    "status": status.value,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            .eq("id", order_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_order(result.data[0])

    def list_for_user(self, user_id: str) -> list[Order]:
        result = (
            self._db.table("orders")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_order(row) for row in result.data or []]

    def list_for_user_product(self, user_id: str, product_id: str) -> list[Order]:
        result = (
            self._db.table("orders")
            .select("*")
            .eq("user_id", user_id)
            .eq("product_id", product_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_order(row) for row in result.data or []]

    def list_all(self) -> list[Order]:
        result = self._db.table("orders").select("*").order("created_at", desc=True).execute()
        return [self._map_to_order(row) for row in result.data or []]

    def _map_to_order(self, data: dict[str, Any]) -> Order:
        """Map database row to Order model."""
        return Order(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            product_id=str(data["product_id"]),
            amount=Decimal(str(data["amount"])),
            status=OrderStatus(data["status"]),
            external_payment_ref=data.get("external_payment_ref"),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )


class InMemoryOrderRepository:
    """
    In-memory order storage.

    For testing and development. Use OrderRepository for production.
    """

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}

    def get(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def get_by_payment_ref(self, external_payment_ref: str) -> Optional[Order]:
        for order in self._orders.values():
            if order.external_payment_ref == external_payment_ref:
                return order
        return None

    def create(self, data: dict[str, Any]) -> Order:
        ref = data.get("external_payment_ref")
        if ref and self.get_by_payment_ref(ref) is not None:
            raise DuplicateOrderError(ref)

        now = datetime.now(timezone.utc)
        order = Order(
            **{
                **data,
                "id": str(uuid.uuid4()),
                "created_at": data.get("created_at", now),
                "updated_at": now,
            }
        )
        self._orders[order.id] = order
        return order

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None:
            return None
        updated = order.model_copy(
            update={"status": status, "updated_at": datetime.now(timezone.utc)}
        )
        self._orders[order_id] = updated
        return updated

    def list_for_user(self, user_id: str) -> list[Order]:
        return _newest_first([o for o in self._orders.values() if o.user_id == user_id])

    def list_for_user_product(self, user_id: str, product_id: str) -> list[Order]:
        return _newest_first(
            [
                o for o in self._orders.values()
                if o.user_id == user_id and o.product_id == product_id
            ]
        )

    def list_all(self) -> list[Order]:
        return _newest_first(list(self._orders.values()))
