"""
Pytest configuration and shared test helpers for backend tests.
"""
import hashlib
import hmac
import json
import sys
import time
from pathlib import Path

# Make backend modules (server, routes, services, utils, wizard) importable when run from the repo root.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

WEBHOOK_SECRET = "whsec_test_wedding_newspaper"

# Shared TestClient fixture so tests can use in-process requests without a running server.
from fastapi.testclient import TestClient
from server import app


@pytest.fixture
def client():
    """Return a TestClient for the main FastAPI app (server:app). Use for unit-style API tests."""
    return TestClient(app)


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Build a Stripe-Signature header value the way Stripe signs webhook deliveries."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def make_event(event_type: str = "checkout.session.completed", obj: dict = None, event_id: str = "evt_test_001") -> bytes:
    """Minimal Stripe event body as raw bytes."""
    return json.dumps({
        "id": event_id,
        "object": "event",
        "type": event_type,
        "livemode": False,
        "data": {"object": obj if obj is not None else {}},
    }).encode("utf-8")
