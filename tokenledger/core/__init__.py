"""
Core primitives for the token actor.

This module provides the foundational abstractions shared by every layer:
- Messages: init payload, actions, events, queries and their decoding
- Errors: typed ledger rejections and fatal invocation failures
- Canonical: deterministic serialization
- Clock: deterministic logical time
- IDs: actor identities
"""

from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .clock import DeterministicClock
from .errors import (
    AlreadyInitializedError,
    DecodeError,
    ErrorKind,
    FatalError,
    InvalidTransitionError,
    LedgerError,
    NotInitializedError,
)
from .ids import ZERO_ID, actor_id_for, is_zero, normalize_actor_id, stable_id
from .messages import Reply, QueryReply, decode_action, decode_init, decode_query

__all__ = [
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "DeterministicClock",
    "ErrorKind",
    "LedgerError",
    "FatalError",
    "DecodeError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "InvalidTransitionError",
    "ZERO_ID",
    "actor_id_for",
    "is_zero",
    "normalize_actor_id",
    "stable_id",
    "Reply",
    "QueryReply",
    "decode_action",
    "decode_init",
    "decode_query",
]
