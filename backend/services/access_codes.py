"""
Access code service.

Business rules:
- Format: WN-YYYY-XXXXXX-NNNN (year of minting, 6 random base36 chars upper-case, last 4 digits of epoch ms).
- Minted on checkout.session.completed only.
- Validation is a format check: prefix WN- and minimum length. No registry lookup, no expiry, no single-use.
  Any string that passes the check is accepted, whether or not it was ever minted.
- Codes are not persisted anywhere.
"""
import re
import secrets
import string
import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

ACCESS_CODE_PREFIX = "WN"
ACCESS_CODE_MIN_LENGTH = 10
RANDOM_PART_ALPHABET = string.digits + string.ascii_uppercase
RANDOM_PART_LENGTH = 6
SUFFIX_LENGTH = 4
ACCESS_CODE_FORMAT = "{prefix}-{year}-{random}-{suffix}"

# Shape of a minted code. Validation does NOT use this; it only checks prefix and length.
MINTED_CODE_PATTERN = re.compile(
    rf"^{ACCESS_CODE_PREFIX}-\d{{4}}-[0-9A-Z]{{{RANDOM_PART_LENGTH}}}-\d{{{SUFFIX_LENGTH}}}$"
)


def is_valid_access_code(code: Optional[str]) -> bool:
    """Return True if code starts with 'WN-' and is at least 10 characters long."""
    if not isinstance(code, str):
        return False
    return code.startswith(f"{ACCESS_CODE_PREFIX}-") and len(code) >= ACCESS_CODE_MIN_LENGTH


def generate_access_code(now: Optional[datetime] = None) -> str:
    """
    Mint a new access code.

    Args:
        now: Override for the minting time (UTC). Defaults to the current time.

    Returns:
        e.g. WN-2026-K3Q9ZA-4821
    """
    now = now or datetime.now(timezone.utc)
    random_part = "".join(secrets.choice(RANDOM_PART_ALPHABET) for _ in range(RANDOM_PART_LENGTH))
    epoch_ms = int(now.timestamp() * 1000)
    suffix = str(epoch_ms)[-SUFFIX_LENGTH:].zfill(SUFFIX_LENGTH)
    return ACCESS_CODE_FORMAT.format(
        prefix=ACCESS_CODE_PREFIX,
        year=f"{now.year:04d}",
        random=random_part,
        suffix=suffix,
    )
