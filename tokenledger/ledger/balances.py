"""
Ledger store: account balances and the current supply counter.

Absent accounts hold zero. Every mutating method keeps
current_supply == sum(balances) and never drives a balance below zero.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.errors import ErrorKind, LedgerError


@dataclass
class Ledger:
    balances: Dict[str, int] = field(default_factory=dict)
    current_supply: int = 0

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def check_balance(self, account: str, amount: int) -> None:
        """
        Raises:
            LedgerError(NotEnoughBalance): If account holds less than amount
        """
        if self.balance_of(account) < amount:
            raise LedgerError(ErrorKind.NOT_ENOUGH_BALANCE)

    def credit(self, account: str, amount: int) -> None:
        self.balances[account] = self.balance_of(account) + amount

    def debit(self, account: str, amount: int) -> None:
        """
        Raises:
            LedgerError(NotEnoughBalance): If account holds less than amount
        """
        self.check_balance(account, amount)
        self.balances[account] = self.balance_of(account) - amount

    def mint(self, to: str, amount: int) -> None:
        self.credit(to, amount)
        self.current_supply += amount

    def burn(self, account: str, amount: int) -> None:
        self.debit(account, amount)
        self.current_supply -= amount

    def move(self, from_: str, to: str, amount: int) -> None:
        """Debit from_ and credit to; the debit fails before anything is written."""
        self.debit(from_, amount)
        self.credit(to, amount)

    def total_of_balances(self) -> int:
        return sum(self.balances.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balances": dict(self.balances),
            "current_supply": self.current_supply,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Ledger":
        data = data or {}
        return Ledger(
            balances=dict(data.get("balances", {})),
            current_supply=int(data.get("current_supply", 0)),
        )
