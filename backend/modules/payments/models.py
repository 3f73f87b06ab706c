"""
Payments module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class StripeEventType(str, Enum):
    """Stripe events the webhook acts on. Everything else is acknowledged and ignored."""

    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    CHARGE_REFUNDED = "charge.refunded"


class WebhookOutcome(str, Enum):
    PROCESSED = "processed"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"


class WebhookResult(BaseModel):
    """What the webhook did with one event. Stripe only needs the 2xx."""

    received: bool = True
    event_id: Optional[str] = None
    event_type: Optional[str] = None
    outcome: WebhookOutcome
    order_id: Optional[str] = None
