"""
Allowance store: how much each spender may move on an owner's behalf.

Stored owner-indexed: owner -> {spender -> amount}. Entries are overwritten by
approve, decremented by delegated transfers and never removed, even at zero.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.errors import ErrorKind, LedgerError


@dataclass
class AllowanceBook:
    allowances: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get(owner, {}).get(spender, 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set (not add to) the allowance owner grants spender."""
        self.allowances.setdefault(owner, {})[spender] = amount

    def can_transfer(self, caller: str, owner: str, amount: int) -> None:
        """
        Authorize caller to move amount out of owner's balance.

        An owner moving its own funds is always allowed. Otherwise an
        allowance owner -> caller of at least amount must exist, and it is
        consumed by amount.

        Must only be called once balance sufficiency has been confirmed: it
        mutates on success.

        Raises:
            LedgerError(NotAllowedToTransfer): If no sufficient allowance exists
        """
        if caller == owner:
            return

        spenders = self.allowances.get(owner)
        if spenders is None or caller not in spenders:
            raise LedgerError(ErrorKind.NOT_ALLOWED_TO_TRANSFER)
        if spenders[caller] < amount:
            raise LedgerError(ErrorKind.NOT_ALLOWED_TO_TRANSFER)

        spenders[caller] -= amount

    def to_dict(self) -> Dict[str, Any]:
        return {owner: dict(spenders) for owner, spenders in self.allowances.items()}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AllowanceBook":
        data = data or {}
        return AllowanceBook(
            allowances={owner: dict(spenders) for owner, spenders in data.items()}
        )
