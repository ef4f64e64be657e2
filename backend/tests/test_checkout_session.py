"""
POST /api/create-checkout-session: each package tier reaches Stripe with its exact amount;
unknown tiers are rejected before Stripe; Stripe failures surface as a generic 500.
Tests patch stripe.checkout.Session.create so no live Stripe is needed.
"""
import os
from unittest.mock import MagicMock, patch

import pytest
import stripe

STRIPE_ENV = {"STRIPE_SECRET_KEY": "sk_test_wedding", "FRONTEND_URL": "https://shop.example.com/"}


def _fake_session(session_id="cs_test_001"):
    session = MagicMock()
    session.id = session_id
    session.url = f"https://checkout.stripe.com/c/pay/{session_id}"
    return session


@pytest.mark.parametrize("price_id, amount, name", [
    ("basic", 1999, "Basic Package"),
    ("premium", 2499, "Premium Package"),
    ("complete", 4999, "Complete Bundle"),
])
def test_known_package_calls_stripe_with_exact_amount(client, price_id, amount, name):
    with patch.dict(os.environ, STRIPE_ENV, clear=False):
        with patch("services.stripe_service.stripe.checkout.Session.create", return_value=_fake_session()) as create:
            response = client.post("/api/create-checkout-session", json={"priceId": price_id})

    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_001"}

    create.assert_called_once()
    kwargs = create.call_args.kwargs
    assert kwargs["api_key"] == "sk_test_wedding"
    assert kwargs["mode"] == "payment"
    assert kwargs["payment_method_types"] == ["card"]
    (line_item,) = kwargs["line_items"]
    assert line_item["quantity"] == 1
    assert line_item["price_data"]["unit_amount"] == amount
    assert line_item["price_data"]["currency"] == "usd"
    assert line_item["price_data"]["product_data"]["name"] == name
    assert kwargs["metadata"] == {"priceId": price_id, "packageType": name}


def test_redirect_urls_use_frontend_url_without_trailing_slash(client):
    with patch.dict(os.environ, STRIPE_ENV, clear=False):
        with patch("services.stripe_service.stripe.checkout.Session.create", return_value=_fake_session()) as create:
            client.post("/api/create-checkout-session", json={"priceId": "basic"})

    kwargs = create.call_args.kwargs
    assert kwargs["success_url"] == "https://shop.example.com?success=true&session_id={CHECKOUT_SESSION_ID}"
    assert kwargs["cancel_url"] == "https://shop.example.com?canceled=true"


@pytest.mark.parametrize("body", [
    {"priceId": "gold"},
    {"priceId": "BASIC"},
    {"priceId": ""},
    {},
])
def test_unknown_package_returns_400_without_calling_stripe(client, body):
    with patch.dict(os.environ, STRIPE_ENV, clear=False):
        with patch("services.stripe_service.stripe.checkout.Session.create") as create:
            response = client.post("/api/create-checkout-session", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid price ID"
    create.assert_not_called()


def test_stripe_failure_returns_generic_500(client):
    with patch.dict(os.environ, STRIPE_ENV, clear=False):
        with patch(
            "services.stripe_service.stripe.checkout.Session.create",
            side_effect=stripe.APIConnectionError("connection reset"),
        ):
            response = client.post("/api/create-checkout-session", json={"priceId": "premium"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to create checkout session"
    assert "connection reset" not in response.text


def test_missing_stripe_key_returns_500_without_calling_stripe(client):
    with patch.dict(os.environ, {"STRIPE_SECRET_KEY": "", "STRIPE_API_KEY": ""}, clear=False):
        with patch("services.stripe_service.stripe.checkout.Session.create") as create:
            response = client.post("/api/create-checkout-session", json={"priceId": "basic"})

    assert response.status_code == 500
    create.assert_not_called()


def test_duplicate_submissions_create_duplicate_sessions(client):
    """No idempotency key is sent, so every call reaches Stripe."""
    with patch.dict(os.environ, STRIPE_ENV, clear=False):
        with patch("services.stripe_service.stripe.checkout.Session.create", return_value=_fake_session()) as create:
            client.post("/api/create-checkout-session", json={"priceId": "basic"})
            client.post("/api/create-checkout-session", json={"priceId": "basic"})

    assert create.call_count == 2
    assert all("idempotency_key" not in c.kwargs for c in create.call_args_list)
