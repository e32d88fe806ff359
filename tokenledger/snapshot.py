"""
Deterministic state snapshot utilities.

Ensures the same token state always produces the same bytes, whatever order
accounts, allowances or transaction ids were inserted in.
"""

import hashlib
import json

from .core.canonical import canonical_json_bytes
from .ledger.token import FungibleToken


def serialize_state(token: FungibleToken) -> bytes:
    """
    Serialize token state to deterministic bytes.

    Uses canonical JSON serialization to ensure:
    - Same state always produces same bytes
    - No dict ordering issues
    - No whitespace variance
    """
    return canonical_json_bytes(token.to_dict())


def compute_state_hash(token: FungibleToken) -> str:
    """
    Compute SHA-256 hash of token state.

    Returns:
        Hex string (64 characters)
    """
    return hashlib.sha256(serialize_state(token)).hexdigest()


def state_from_bytes(data: bytes) -> FungibleToken:
    """Rebuild a token from serialize_state() output."""
    return FungibleToken.from_dict(json.loads(data))
