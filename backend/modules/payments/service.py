"""
Stripe webhook handling.

Payment confirmation originates here, from an event signed by Stripe,
rather than from a client reporting its own payment. The checkout flow
puts `user_id`, `product_id` and optionally `unlock_all` into the payment
intent's metadata.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Optional

import stripe

from modules.catalog.exceptions import ProductNotFoundError
from modules.identity.exceptions import UserNotFoundError
from modules.identity.interfaces import IIdentityService
from modules.orders.exceptions import DuplicateOrderError, InvalidStatusTransitionError
from modules.orders.interfaces import IOrderService
from modules.orders.models import OrderStatus

from .exceptions import WebhookNotConfiguredError, WebhookVerificationError
from .models import StripeEventType, WebhookOutcome, WebhookResult

logger = logging.getLogger(__name__)

# Seconds a signed timestamp stays valid (Stripe's default)
DEFAULT_TOLERANCE = 300

TRUTHY = {"1", "true", "yes"}


def _metadata_value(metadata: dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = metadata.get(key)
        if value:
            return str(value)
    return None


class PaymentWebhookService:
    """
    Verifies and applies Stripe webhook events.

    Handlers are idempotent: Stripe delivers at least once, so a repeated
    event is acknowledged without recording a second order.
    """

    def __init__(
        self,
        orders: IOrderService,
        identity: IIdentityService,
        webhook_secret: str,
        tolerance: int = DEFAULT_TOLERANCE,
    ):
        self._orders = orders
        self._identity = identity
        self._webhook_secret = webhook_secret
        self._tolerance = tolerance

    def verify_event(self, payload: bytes, signature: Optional[str]) -> dict[str, Any]:
        """
        Check the Stripe-Signature header and parse the event.

        Raises:
            WebhookNotConfiguredError: If no signing secret is configured
            WebhookVerificationError: If the signature or payload is invalid
        """
        if not self._webhook_secret:
            raise WebhookNotConfiguredError()
        if not signature:
            raise WebhookVerificationError("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, self._webhook_secret, self._tolerance
            )
            event = json.loads(body)
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError() from e
        except ValueError as e:
            # Covers UnicodeDecodeError and malformed JSON
            raise WebhookVerificationError("Invalid webhook payload") from e

        if not isinstance(event, dict) or "type" not in event:
            raise WebhookVerificationError("Invalid webhook payload")
        return event

    async def handle(self, payload: bytes, signature: Optional[str]) -> WebhookResult:
        event = self.verify_event(payload, signature)
        event_id = event.get("id")
        event_type = event["type"]
        obj = (event.get("data") or {}).get("object") or {}

        if event_type == StripeEventType.PAYMENT_INTENT_SUCCEEDED.value:
            result = await self._payment_succeeded(obj)
        elif event_type == StripeEventType.CHARGE_REFUNDED.value:
            result = await self._charge_refunded(obj)
        else:
            logger.debug("Ignoring Stripe event %s (%s)", event_id, event_type)
            result = WebhookResult(outcome=WebhookOutcome.IGNORED)

        return result.model_copy(update={"event_id": event_id, "event_type": event_type})

    async def _payment_succeeded(self, intent: dict[str, Any]) -> WebhookResult:
        intent_id = intent.get("id")
        metadata = intent.get("metadata") or {}
        user_id = _metadata_value(metadata, "user_id", "userId")
        product_id = _metadata_value(metadata, "product_id", "productId")
        unlock_all = (_metadata_value(metadata, "unlock_all", "unlockAll") or "").lower() in TRUTHY

        if not intent_id or not user_id:
            logger.warning("payment_intent.succeeded %s without user metadata; ignored", intent_id)
            return WebhookResult(outcome=WebhookOutcome.IGNORED)

        cents = intent.get("amount_received", intent.get("amount", 0)) or 0
        amount = Decimal(int(cents)) / 100

        outcome = WebhookOutcome.IGNORED
        order_id = None
        try:
            if product_id:
                try:
                    order = await self._orders.record_completed_order(
                        user_id, product_id, amount, intent_id
                    )
                    order_id = order.id
                    outcome = WebhookOutcome.PROCESSED
                except DuplicateOrderError:
                    existing = await self._orders.get_order_by_payment_ref(intent_id)
                    order_id = existing.id if existing else None
                    outcome = WebhookOutcome.DUPLICATE
                    logger.info("Payment %s already recorded", intent_id)

            if unlock_all:
                await self._orders.mark_user_paid(user_id)
                if outcome == WebhookOutcome.IGNORED:
                    outcome = WebhookOutcome.PROCESSED

            customer_id = intent.get("customer")
            if customer_id:
                await self._identity.update_payment_customer(user_id, str(customer_id))
        except (UserNotFoundError, ProductNotFoundError) as e:
            # Retrying will not make the row appear; acknowledge and alert
            logger.error("Payment %s references %s; not recorded", intent_id, e.message)
            return WebhookResult(outcome=WebhookOutcome.IGNORED)

        return WebhookResult(outcome=outcome, order_id=order_id)

    async def _charge_refunded(self, charge: dict[str, Any]) -> WebhookResult:
        intent_id = charge.get("payment_intent")
        if not intent_id:
            logger.warning("charge.refunded %s without payment intent; ignored", charge.get("id"))
            return WebhookResult(outcome=WebhookOutcome.IGNORED)

        order = await self._orders.get_order_by_payment_ref(intent_id)
        if order is None:
            logger.warning("Refund for unknown payment %s", intent_id)
            return WebhookResult(outcome=WebhookOutcome.IGNORED)

        if order.status == OrderStatus.REFUNDED:
            return WebhookResult(outcome=WebhookOutcome.DUPLICATE, order_id=order.id)

        try:
            await self._orders.update_order_status(order.id, OrderStatus.REFUNDED)
        except InvalidStatusTransitionError:
            logger.warning("Refund for order %s in status %s; ignored", order.id, order.status.value)
            return WebhookResult(outcome=WebhookOutcome.IGNORED, order_id=order.id)

        return WebhookResult(outcome=WebhookOutcome.PROCESSED, order_id=order.id)
