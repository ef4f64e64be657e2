"""
Environment-driven settings for the Wedding Newspaper API.
Values are read at call time so a changed environment (or .env reload) is picked up without re-import.
"""
import os
import logging
from typing import List

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_FRONTEND_URL = "https://ai-wedding.appverta.app"
DEFAULT_CORS_ORIGINS = [
    "https://ai-wedding.appverta.app",
    "https://wedding.abverda.com",
    "http://localhost:5173",
    "http://localhost:3000",
]


def get_port() -> int:
    raw = (os.getenv("PORT") or "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("PORT=%r is not an integer; falling back to %s", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_environment() -> str:
    """ENVIRONMENT, then NODE_ENV (older Render configs), else development."""
    return (
        (os.getenv("ENVIRONMENT") or "").strip()
        or (os.getenv("NODE_ENV") or "").strip()
        or "development"
    )


def get_stripe_secret_key() -> str:
    return (os.getenv("STRIPE_SECRET_KEY") or os.getenv("STRIPE_API_KEY") or "").strip()


def get_stripe_mode() -> str:
    """test / live / unset, derived from the key prefix. Safe to log."""
    key = get_stripe_secret_key()
    if not key:
        return "unset"
    if key.startswith("sk_live_") or key.startswith("rk_live_"):
        return "live"
    return "test"


def get_webhook_secret() -> str:
    return (os.getenv("STRIPE_WEBHOOK_SECRET") or "").strip()


def get_frontend_url() -> str:
    """
    Base URL the customer is sent back to after checkout (no trailing slash).
    Reads FRONTEND_URL; defaults to the production front-end.
    """
    raw = (os.getenv("FRONTEND_URL") or "").strip().rstrip("/")
    return raw or DEFAULT_FRONTEND_URL


def get_cors_origins() -> List[str]:
    """Comma-separated CORS_ORIGINS; blank entries dropped. Defaults to the known front-ends."""
    raw = (os.getenv("CORS_ORIGINS") or "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]
