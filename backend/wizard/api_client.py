"""
HTTP client used by the wizard.

Talks to two collaborators:
- the Wedding Newspaper API (validate-code, create-checkout-session)
- the newspaper generation endpoint (opaque: accepts form fields + accessCode, returns JSON)

One request per call; no retries. Network errors propagate as requests.RequestException.
"""
import os
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_GENERATION_URL = "https://wedding-newspaper-backend.onrender.com/generate-newspaper"
DEFAULT_TIMEOUT = 60.0
JSON_HEADERS = {"Content-Type": "application/json"}


class WeddingApiClient:
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        generation_url: str = DEFAULT_GENERATION_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.generation_url = generation_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "WeddingApiClient":
        """Build from WEDDING_API_URL, WEDDING_GENERATION_URL and WEDDING_API_TIMEOUT."""
        timeout_raw = (os.getenv("WEDDING_API_TIMEOUT") or "").strip()
        timeout = DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                logger.warning("WEDDING_API_TIMEOUT=%r is not a number; falling back to %s", timeout_raw, DEFAULT_TIMEOUT)
        return cls(
            api_url=(os.getenv("WEDDING_API_URL") or "").strip() or DEFAULT_API_URL,
            generation_url=(os.getenv("WEDDING_GENERATION_URL") or "").strip() or DEFAULT_GENERATION_URL,
            timeout=timeout,
            session=session,
        )

    def validate_code(self, code: str) -> requests.Response:
        return self.session.post(
            f"{self.api_url}/api/validate-code",
            json={"code": code},
            headers=JSON_HEADERS,
            timeout=self.timeout,
        )

    def create_checkout_session(self, price_id: str) -> requests.Response:
        return self.session.post(
            f"{self.api_url}/api/create-checkout-session",
            json={"priceId": price_id},
            headers=JSON_HEADERS,
            timeout=self.timeout,
        )

    def generate_newspaper(self, payload: Dict[str, Any]) -> requests.Response:
        logger.info("Requesting newspaper generation from %s", self.generation_url)
        return self.session.post(
            self.generation_url,
            json=payload,
            headers=JSON_HEADERS,
            timeout=self.timeout,
        )
