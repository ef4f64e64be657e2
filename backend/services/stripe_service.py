"""Stripe Service - Checkout session creation for newspaper packages.

This service handles:
- Resolving the requested package against package_registry
- Creating a one-time payment Checkout Session with inline price_data

Key Principles:
- Unknown packages are rejected before Stripe is called
- Amounts come from package_registry only
- Metadata carries priceId and packageType for the webhook
- No idempotency key: duplicate submissions create duplicate sessions
"""
import stripe
import logging
from typing import Dict, Any, Optional

from services.package_registry import package_registry, CURRENCY
from utils.app_config import get_stripe_secret_key, get_frontend_url

logger = logging.getLogger(__name__)


class UnknownPackageError(ValueError):
    """Requested priceId is not in the package table."""


class CheckoutSessionError(Exception):
    """Stripe is not configured or the Checkout Session call failed."""


class StripeService:
    """Stripe checkout operations."""

    def build_session_params(self, price_id: Optional[str]) -> Dict[str, Any]:
        """
        Build Checkout Session parameters for a package.

        Raises:
            UnknownPackageError: price_id is not basic/premium/complete
        """
        code = package_registry.resolve(price_id)
        if code is None:
            raise UnknownPackageError(f"Invalid price ID: {price_id!r}")

        package = package_registry.get_package(code)
        base = get_frontend_url()

        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": CURRENCY,
                        "product_data": {
                            "name": package["name"],
                            "description": package["description"],
                        },
                        "unit_amount": package["amount"],
                    },
                    "quantity": 1,
                },
            ],
            "mode": "payment",
            "success_url": f"{base}?success=true&session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{base}?canceled=true",
            "metadata": {
                "priceId": code.value,
                "packageType": package["name"],
            },
        }

    async def create_checkout_session(self, price_id: Optional[str]) -> Dict[str, Any]:
        """
        Create a Stripe Checkout Session for a one-time package purchase.

        Args:
            price_id: Package key sent by the client (basic, premium, complete)

        Returns:
            Dict with url (Stripe-hosted checkout page) and session_id

        Raises:
            UnknownPackageError: before any Stripe call
            CheckoutSessionError: Stripe key missing or Stripe call failed
        """
        session_params = self.build_session_params(price_id)

        api_key = get_stripe_secret_key()
        if not api_key:
            raise CheckoutSessionError("STRIPE_SECRET_KEY is not set. Configure env and restart.")

        try:
            session = stripe.checkout.Session.create(api_key=api_key, **session_params)
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout error for package {price_id}: {e}")
            raise CheckoutSessionError(f"Failed to create checkout session: {str(e)}") from e

        logger.info(
            "CHECKOUT_SESSION_CREATED session_id=%s price_id=%s amount=%s",
            session.id, price_id, session_params["line_items"][0]["price_data"]["unit_amount"],
        )

        return {
            "url": session.url,
            "session_id": session.id,
        }


stripe_service = StripeService()
