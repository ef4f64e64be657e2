"""Webhook Routes - Stripe payment webhooks.

Stripe webhook endpoint with:
- Signature verification on the raw request body
- Access code minting on checkout.session.completed

POST /api/webhook - Stripe webhook endpoint

No body model is declared on this route: the bytes Stripe signed must reach the verifier unmodified.
"""
from fastapi import APIRouter, Request, Header, status
from fastapi.responses import PlainTextResponse
from services.stripe_webhook_service import stripe_webhook_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["webhooks"])


@router.post("/api/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(None, alias="Stripe-Signature")
):
    """
    Handle Stripe webhooks at /api/webhook.

    Returns {"received": true} once the event is verified and dispatched; 400 with
    the verification error as plain text otherwise. Nothing is retried.
    """
    payload = await request.body()

    success, message, details = await stripe_webhook_service.process_webhook(
        payload=payload,
        signature=stripe_signature
    )

    if not success:
        return PlainTextResponse(
            f"Webhook Error: {message}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return {"received": True}
