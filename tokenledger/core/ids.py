"""
Actor identities.

An identity is an opaque 32-byte address, carried as a 64-character lowercase
hex string. The all-zero identity is the null address.
"""

import hashlib
import re

ACTOR_ID_BYTES = 32
ZERO_ID = "0" * (ACTOR_ID_BYTES * 2)

_HEX_ID = re.compile(r"[0-9a-fA-F]{%d}" % (ACTOR_ID_BYTES * 2))


def normalize_actor_id(value: str) -> str:
    """
    Normalize an identity to 64 lowercase hex characters.

    Accepts an optional "0x" prefix.

    Raises:
        ValueError: If value is not a 32-byte hex string
    """
    if not isinstance(value, str):
        raise ValueError(f"actor id must be a hex string, got {type(value).__name__}")
    raw = value[2:] if value[:2].lower() == "0x" else value
    if len(raw) != ACTOR_ID_BYTES * 2:
        raise ValueError(f"actor id must be {ACTOR_ID_BYTES} bytes, got {len(raw) // 2}")
    if not _HEX_ID.fullmatch(raw):
        raise ValueError(f"actor id is not valid hex: {value!r}")
    return raw.lower()


def is_zero(actor_id: str) -> bool:
    return actor_id == ZERO_ID


def stable_id(*parts: str) -> str:
    """
    Generate stable ID derived from inputs (no randomness).

    Returns:
        SHA-256 hash as hex string (a valid actor id)

    Example:
        stable_id("actor", "alice") -> "a3f2..."
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def actor_id_for(name: str) -> str:
    """Deterministic identity for a human-readable name (scripts and tests)."""
    return stable_id("actor", name)
