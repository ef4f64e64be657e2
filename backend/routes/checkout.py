"""Checkout Routes - Stripe Checkout for newspaper packages.

Endpoints:
- POST /api/create-checkout-session - Create a one-time payment session for basic/premium/complete
"""
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from services.stripe_service import stripe_service, UnknownPackageError
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["checkout"])


class CheckoutSessionRequest(BaseModel):
    """Request to create checkout session."""
    model_config = ConfigDict(populate_by_name=True)

    price_id: Optional[str] = Field(None, alias="priceId")  # basic, premium, complete


class CheckoutSessionResponse(BaseModel):
    url: str


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(body: CheckoutSessionRequest):
    """
    Create Stripe checkout session for a package.

    Unknown package keys are rejected with 400 before Stripe is called.
    Any Stripe failure is reported as a generic 500.
    """
    try:
        result = await stripe_service.create_checkout_session(body.price_id)
    except UnknownPackageError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid price ID"
        )
    except Exception as e:
        logger.error(f"Error creating checkout session: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create checkout session"
        )

    return CheckoutSessionResponse(url=result["url"])
