"""Tests for order repositories."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from modules.orders.exceptions import DuplicateOrderError
from modules.orders.models import OrderStatus
from modules.orders.repository import InMemoryOrderRepository, OrderRepository


def order_data(**overrides) -> dict:
    data = {
        "user_id": "user-1",
        "product_id": "prod-1",
        "amount": Decimal("49.00"),
        "status": OrderStatus.COMPLETED,
        "external_payment_ref": "pi_1",
    }
    data.update(overrides)
    return data


class TestOrderRepository:
    def test_create_serializes_amount_and_status(self):
        db = MagicMock()
        db.table.return_value.insert.return_value.execute.return_value.data = [
            {
                **order_data(),
                "id": "order-1",
                "amount": "49.00",
                "status": "completed",
                "created_at": "2024-05-01T12:00:00+00:00",
                "updated_at": "2024-05-01T12:00:00+00:00",
            }
        ]

        order = OrderRepository(db).create(order_data())

        row = db.table.return_value.insert.call_args[0][0]
        assert row["amount"] == "49.00"
        assert row["status"] == "completed"
        assert order.amount == Decimal("49.00")
        assert order.status == OrderStatus.COMPLETED

    def test_unique_violation_is_duplicate(self):
        db = MagicMock()
        db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value", "details": None, "hint": None}
        )
        with pytest.raises(DuplicateOrderError):
            OrderRepository(db).create(order_data())


class TestInMemoryOrderRepository:
    def test_duplicate_ref(self):
        repo = InMemoryOrderRepository()
        repo.create(order_data())
        with pytest.raises(DuplicateOrderError):
            repo.create(order_data())

    def test_newest_first(self):
        repo = InMemoryOrderRepository()
        t0 = datetime(2024, 5, 1, tzinfo=timezone.utc)
        old = repo.create(order_data(external_payment_ref=None, created_at=t0))
        new = repo.create(order_data(external_payment_ref=None, created_at=t0 + timedelta(days=1)))

        assert [o.id for o in repo.list_for_user_product("user-1", "prod-1")] == [new.id, old.id]
        assert repo.list_for_user_product("user-1", "other") == []
