"""
Ledger state machine.

- Ledger: balances and current supply
- AllowanceBook: owner -> spender authorizations
- AdminRegistry: privileged identities and the trusted contract
- TxTracker: per-caller transaction dedup with lazy expiry
- FungibleToken: the aggregate composing all of the above
"""

from .admins import AdminRegistry
from .allowances import AllowanceBook
from .balances import Ledger
from .token import FungibleToken, validate_init
from .tx_tracker import TxTracker

__all__ = [
    "AdminRegistry",
    "AllowanceBook",
    "Ledger",
    "FungibleToken",
    "validate_init",
    "TxTracker",
]
