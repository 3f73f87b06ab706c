"""
Payments module.

Server-side payment confirmation through signed Stripe webhooks.
"""

from .models import StripeEventType, WebhookOutcome, WebhookResult
from .exceptions import PaymentsError, WebhookVerificationError, WebhookNotConfiguredError

__all__ = [
    "StripeEventType",
    "WebhookOutcome",
    "WebhookResult",
    "PaymentsError",
    "WebhookVerificationError",
    "WebhookNotConfiguredError",
]
