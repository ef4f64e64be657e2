"""Stripe Webhook Service - signature verification and event dispatch.

Key Principles:
1. Signature verification: the raw request bytes are checked against STRIPE_WEBHOOK_SECRET
   before anything is parsed. An unverified event never reaches dispatch.
2. No idempotency: a replayed event mints another code.
3. Unhandled event types are accepted and ignored.

Events Handled:
- checkout.session.completed (mints one access code)

Known gap: the minted code is logged only. It is not saved and not emailed to the customer,
so a real purchaser never receives it. Storage and delivery are not implemented here.
"""
import json
import stripe
import logging
from typing import Dict, Any, Optional, Tuple

from services.access_codes import generate_access_code
from utils.app_config import get_webhook_secret

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
NO_EMAIL = "No email provided"
UNKNOWN_PACKAGE = "Unknown package"


def _as_dict(value: Any) -> Dict:
    """Nested Stripe object as a dict; anything else (list, string, null) reads as empty."""
    return value if isinstance(value, dict) else {}


def _extract_webhook_context(event: Dict) -> Dict[str, Any]:
    """Safe fields for structured logging (event_id, event_type, livemode, checkout_session_id)."""
    obj = _as_dict(_as_dict(event.get("data")).get("object"))
    return {
        "event_id": event.get("id"),
        "event_type": event.get("type"),
        "livemode": event.get("livemode"),
        "checkout_session_id": obj.get("id") if event.get("type") == CHECKOUT_COMPLETED else None,
    }


class StripeWebhookService:
    """Stripe webhook handler."""

    # =========================================================================
    # Event Processing Entry Point
    # =========================================================================

    def verify_signature(self, payload: bytes, signature: Optional[str]) -> Optional[str]:
        """
        Check the Stripe-Signature header against the raw payload.

        Returns:
            None when the signature is valid, otherwise the error text.
        """
        webhook_secret = get_webhook_secret()
        if not webhook_secret:
            return "STRIPE_WEBHOOK_SECRET is not configured"
        if not signature:
            return "No stripe-signature header value was provided."
        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError:
            return "Payload is not valid UTF-8"
        try:
            stripe.WebhookSignature.verify_header(
                body, signature, webhook_secret, stripe.Webhook.DEFAULT_TOLERANCE
            )
        except stripe.SignatureVerificationError as e:
            return str(e)
        return None

    async def process_webhook(
        self,
        payload: bytes,
        signature: Optional[str]
    ) -> Tuple[bool, str, Optional[Dict]]:
        """
        Main webhook entry point.

        Returns:
            (success, message, details)
        """
        # Step 1: Verify signature on the untouched bytes
        error = self.verify_signature(payload, signature)
        if error:
            logger.error("Webhook signature verification failed: %s", error)
            return False, error, {"error": error}
        logger.info("Webhook signature verified successfully")

        # Step 2: Parse (bytes are trusted from here on)
        try:
            event = json.loads(payload)
        except ValueError as e:
            logger.error(f"Webhook parse error: {e}")
            return False, "Invalid payload", {"error": str(e)}
        if not isinstance(event, dict):
            logger.error("Webhook payload is not a JSON object")
            return False, "Invalid payload", {"error": "payload must be a JSON object"}

        ctx = _extract_webhook_context(event)
        logger.info(
            "WEBHOOK_RECEIVED event_id=%s event_type=%s livemode=%s checkout_session_id=%s",
            ctx.get("event_id"), ctx.get("event_type"), ctx.get("livemode"), ctx.get("checkout_session_id"),
        )

        # Step 3: Dispatch
        result = await self._handle_event(event)
        return True, "Processed", result

    # =========================================================================
    # Event Handlers
    # =========================================================================

    async def _handle_event(self, event: Dict) -> Dict:
        """Route event to appropriate handler."""
        event_type = event.get("type")
        data = _as_dict(_as_dict(event.get("data")).get("object"))

        handlers = {
            CHECKOUT_COMPLETED: self._handle_checkout_completed,
        }

        handler = handlers.get(event_type) if isinstance(event_type, str) else None
        if handler:
            return await handler(data, event)

        logger.info(f"Unhandled event type {event_type}")
        return {"handled": False, "event_type": event_type}

    async def _handle_checkout_completed(self, session: Dict, event: Dict) -> Dict:
        """
        Handle checkout.session.completed: mint one access code for the purchase.

        The code is logged with the customer email and package type. It is not persisted
        and not delivered.
        """
        session_id = session.get("id")
        logger.info(f"Payment successful for session: {session_id}")

        access_code = generate_access_code()

        customer_details = _as_dict(session.get("customer_details"))
        customer_email = customer_details.get("email") or NO_EMAIL
        metadata = _as_dict(session.get("metadata"))
        package_type = metadata.get("packageType") or UNKNOWN_PACKAGE

        logger.info(
            "ACCESS_CODE_MINTED session_id=%s access_code=%s customer_email=%s package_type=%s",
            session_id, access_code, customer_email, package_type,
        )
        logger.warning(
            "ACCESS_CODE_NOT_DELIVERED access_code=%s session_id=%s: code is not saved or sent to the customer",
            access_code, session_id,
        )

        return {
            "handled": True,
            "event_type": CHECKOUT_COMPLETED,
            "session_id": session_id,
            "access_code": access_code,
            "customer_email": customer_email,
            "package_type": package_type,
            "persisted": False,
            "delivered": False,
        }


stripe_webhook_service = StripeWebhookService()
