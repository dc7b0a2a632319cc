"""
Identifiers and timestamps for stored items.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

# Item identifiers are 24 lowercase hex characters.
_ID_PATTERN = re.compile(r"[0-9a-f]{24}")


def generate_id() -> str:
    """
    Generate a unique item identifier.

    Returns:
        A 24-character hex ID like "65a1f0c2b3d4e5f60718293a"
    """
    return uuid.uuid4().hex[:24]


def is_valid_id(value: object) -> bool:
    """Check whether a value is a well-formed item identifier."""
    return isinstance(value, str) and bool(_ID_PATTERN.fullmatch(value))


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)
