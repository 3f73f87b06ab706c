"""
Orders module.

Records confirmed payments as orders and owns the global-unlock flag
transition.

Public API:
- IOrderService: Interface for order operations
- IOrderRepository: Persistence contract (read by the entitlement resolver)
- Order, OrderStatus, CreateOrderRequest, SalesStats: Models
- Order exceptions
"""

from .interfaces import IOrderService, IOrderRepository
from .models import (
    Order,
    OrderStatus,
    CreateOrderRequest,
    UpdateOrderStatusRequest,
    MarkPaidResponse,
    SalesStats,
)
from .exceptions import (
    OrderNotFoundError,
    DuplicateOrderError,
    InvalidAmountError,
    InvalidStatusTransitionError,
    ClientPaymentConfirmationDisabledError,
)

__all__ = [
    # Interfaces
    "IOrderService",
    "IOrderRepository",
    # Models
    "Order",
    "OrderStatus",
    "CreateOrderRequest",
    "UpdateOrderStatusRequest",
    "MarkPaidResponse",
    "SalesStats",
    # Exceptions
    "OrderNotFoundError",
    "DuplicateOrderError",
    "InvalidAmountError",
    "InvalidStatusTransitionError",
    "ClientPaymentConfirmationDisabledError",
]
