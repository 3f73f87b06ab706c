"""
Orders module exceptions.

These exceptions are raised by the orders module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from decimal import Decimal

from shared.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError


class OrderNotFoundError(NotFoundError):
    """Raised when an order ID doesn't exist."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class DuplicateOrderError(ConflictError):
    """Raised when a payment reference has already been recorded as an order."""

    def __init__(self, external_payment_ref: str):
        super().__init__(
            f"Payment already recorded: {external_payment_ref}",
            code="DUPLICATE_ORDER",
            details={"external_payment_ref": external_payment_ref},
        )


class InvalidAmountError(ValidationError):
    """Raised when an order amount is invalid."""

    def __init__(self, amount: Decimal, reason: str):
        super().__init__(
            f"Invalid amount: {amount}. {reason}",
            code="INVALID_AMOUNT",
            details={"amount": str(amount), "reason": reason},
        )


class InvalidStatusTransitionError(ConflictError):
    """Raised when an order cannot move from its current status to the requested one."""

    def __init__(self, order_id: str, current: str, requested: str):
        super().__init__(
            f"Order {order_id} cannot move from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"order_id": order_id, "current": current, "requested": requested},
        )


class ClientPaymentConfirmationDisabledError(AuthorizationError):
    """
    Raised when a client tries to self-report a payment while only
    processor webhooks may confirm payments.
    """

    def __init__(self):
        super().__init__(
            "Payment confirmation must come from the payment processor",
            code="CLIENT_CONFIRMATION_DISABLED",
        )
