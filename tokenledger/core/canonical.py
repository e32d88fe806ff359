"""
Canonical serialization for deterministic hashing.

All state snapshots go through these functions so that the same ledger state
produces identical bytes regardless of insertion order.
"""

import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list/set to canonical form.

    Rules:
    - dict keys stringified and sorted
    - tuples converted to lists
    - sets and frozensets converted to sorted lists
    - recursive normalization
    """
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (set, frozenset)):
        return [canonicalize(x) for x in sorted(obj)]
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Same guarantees as canonical_json_bytes but returns string."""
    return canonical_json_bytes(obj).decode("utf-8")
