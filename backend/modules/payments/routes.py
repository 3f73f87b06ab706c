"""
Payment confirmation webhook endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from api.dependencies import get_payment_webhook_service

from .models import WebhookResult
from .service import PaymentWebhookService

router = APIRouter()


@router.post("/webhooks/stripe", response_model=WebhookResult)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
    service: PaymentWebhookService = Depends(get_payment_webhook_service),
) -> WebhookResult:
    """
    Receive a Stripe event.

    The raw body is verified against the Stripe-Signature header; an
    invalid signature gets 400 and Stripe retries later.
    """
    payload = await request.body()
    return await service.handle(payload, stripe_signature)
