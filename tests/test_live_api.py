"""
Live smoke tests against a running Wedding Newspaper API.

Features tested:
1. Health check payload
2. Access code validation (valid, invalid, missing)
3. Checkout session rejection for unknown packages
4. Webhook rejection without a valid signature

Skipped unless BACKEND_URL is set, e.g. BACKEND_URL=https://wedding-newspaper-api.onrender.com
"""

import os

import pytest
import requests

BASE_URL = os.environ.get("BACKEND_URL", "").rstrip("/")

pytestmark = pytest.mark.skipif(not BASE_URL, reason="BACKEND_URL not set")


class TestLiveApi:
    """Endpoints that do not create anything at Stripe"""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        yield
        self.session.close()

    # ==================== GET /api/health ====================
    def test_health(self):
        response = self.session.get(f"{BASE_URL}/api/health", timeout=30)
        assert response.status_code == 200, f"Failed: {response.text}"
        data = response.json()
        assert data["status"] == "OK"
        assert "timestamp" in data
        assert "environment" in data

    # ==================== POST /api/validate-code ====================
    def test_validate_code_accepts_well_formed_code(self):
        response = self.session.post(f"{BASE_URL}/api/validate-code", json={"code": "WN-2026-ABCDEF-1234"}, timeout=30)
        assert response.status_code == 200, f"Failed: {response.text}"
        assert response.json()["valid"] is True

    def test_validate_code_rejects_bad_format(self):
        response = self.session.post(f"{BASE_URL}/api/validate-code", json={"code": "NOPE-123456"}, timeout=30)
        assert response.status_code == 400

    def test_validate_code_requires_code(self):
        response = self.session.post(f"{BASE_URL}/api/validate-code", json={}, timeout=30)
        assert response.status_code == 400

    # ==================== POST /api/create-checkout-session ====================
    def test_checkout_rejects_unknown_package(self):
        response = self.session.post(f"{BASE_URL}/api/create-checkout-session", json={"priceId": "platinum"}, timeout=30)
        assert response.status_code == 400

    # ==================== POST /api/webhook ====================
    def test_webhook_rejects_unsigned_event(self):
        response = self.session.post(
            f"{BASE_URL}/api/webhook",
            data=b'{"type": "checkout.session.completed", "data": {"object": {}}}',
            headers={"Stripe-Signature": "t=1,v1=deadbeef"},
            timeout=30,
        )
        assert response.status_code == 400
        assert response.text.startswith("Webhook Error")
