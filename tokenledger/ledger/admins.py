"""
Admin registry: identities allowed to run privileged operations.

Also holds the single trusted contract whose transfers bypass allowance checks.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.errors import ErrorKind, LedgerError
from ..core.ids import ZERO_ID, is_zero


@dataclass
class AdminRegistry:
    admins: List[str] = field(default_factory=list)
    trusted_contract: str = ZERO_ID

    def is_admin(self, actor_id: str) -> bool:
        return actor_id in self.admins

    def require_admin(self, caller: str) -> None:
        """
        Raises:
            LedgerError(NotAdmin): If caller is not an admin
        """
        if not self.is_admin(caller):
            raise LedgerError(ErrorKind.NOT_ADMIN)

    def add(self, caller: str, admin_id: str) -> None:
        self.require_admin(caller)
        if self.is_admin(admin_id):
            raise LedgerError(ErrorKind.ADMIN_ALREADY_EXISTS)
        self.admins.append(admin_id)

    def remove(self, caller: str, admin_id: str) -> None:
        """
        Remove admin_id. Removing an identity that is not an admin is a no-op.

        Nothing stops the set from shrinking to a single admin.
        """
        self.require_admin(caller)
        if admin_id == caller:
            raise LedgerError(ErrorKind.CANT_DELETE_YOURSELF)
        self.admins = [a for a in self.admins if a != admin_id]

    def set_trusted_contract(self, caller: str, contract_id: str) -> None:
        """Register the trusted contract. Registration happens at most once."""
        self.require_admin(caller)
        if is_zero(contract_id):
            raise LedgerError(ErrorKind.ZERO_ADDRESS)
        if not is_zero(self.trusted_contract):
            raise LedgerError(ErrorKind.ADMIN_ALREADY_EXISTS)
        self.trusted_contract = contract_id

    def is_trusted(self, caller: str) -> bool:
        return not is_zero(self.trusted_contract) and caller == self.trusted_contract

    def to_dict(self) -> Dict[str, Any]:
        return {
            "admins": list(self.admins),
            "trusted_contract": self.trusted_contract,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AdminRegistry":
        data = data or {}
        return AdminRegistry(
            admins=list(data.get("admins", [])),
            trusted_contract=data.get("trusted_contract", ZERO_ID),
        )
