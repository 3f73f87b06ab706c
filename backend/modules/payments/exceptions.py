"""
Payments module exceptions.
"""

from shared.exceptions import DigitalProError, ValidationError


class PaymentsError(DigitalProError):
    """Base exception for payment-confirmation errors."""

    pass


class WebhookVerificationError(ValidationError):
    """Raised when a Stripe webhook signature does not verify."""

    def __init__(self, reason: str = "Webhook signature verification failed"):
        super().__init__(
            reason,
            code="WEBHOOK_VERIFICATION_FAILED",
        )


class WebhookNotConfiguredError(PaymentsError):
    """Raised when a webhook arrives but no signing secret is configured."""

    def __init__(self):
        super().__init__(
            "Stripe webhook secret is not configured",
            code="WEBHOOK_NOT_CONFIGURED",
        )
