"""
Token Ledger Actor

Message-driven fungible-token ledger: balances, allowances, admin-gated
operations and per-caller transaction deduplication.
"""

__version__ = "0.1.0"

from .actor import Lifecycle, TokenActor

__all__ = ["Lifecycle", "TokenActor", "__version__"]
