"""Package Registry - the fixed price table for newspaper packages.

Single source of truth for:
- Package keys accepted by checkout (basic, premium, complete)
- Amounts in cents (USD)
- Product name/description shown on the Stripe checkout page

The table is read-only; handlers look packages up here instead of carrying literals.
"""
from enum import Enum
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

CURRENCY = "usd"


class PackageCode(str, Enum):
    """Canonical package keys (sent by the client as priceId)."""
    BASIC = "basic"
    PREMIUM = "premium"
    COMPLETE = "complete"


PACKAGE_DEFINITIONS: Dict[PackageCode, Dict[str, Any]] = {
    PackageCode.BASIC: {
        "amount": 1999,  # $19.99
        "name": "Basic Package",
        "description": "AI Content Co-Pilot + 1 Template Style",
    },
    PackageCode.PREMIUM: {
        "amount": 2499,  # $24.99
        "name": "Premium Package",
        "description": "AI Content Co-Pilot + 3 Template Styles + Instructions",
    },
    PackageCode.COMPLETE: {
        "amount": 4999,  # $49.99
        "name": "Complete Bundle",
        "description": "Everything + Future Updates + Priority Support",
    },
}


class PackageRegistry:
    """Lookup helpers over PACKAGE_DEFINITIONS."""

    def resolve(self, price_id: Optional[str]) -> Optional[PackageCode]:
        """Return the PackageCode for a client priceId, or None if unknown. Exact match only."""
        if not isinstance(price_id, str):
            return None
        try:
            return PackageCode(price_id)
        except ValueError:
            return None

    def get_package(self, code: PackageCode) -> Dict[str, Any]:
        package = PACKAGE_DEFINITIONS[code]
        return {"price_id": code.value, "currency": CURRENCY, **package}


package_registry = PackageRegistry()
