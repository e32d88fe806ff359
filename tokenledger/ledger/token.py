"""
Fungible token aggregate.

Composes the ledger, allowance, admin and dedup stores and exposes one method
per operation. Every method takes the caller identity and the logical time
explicitly, runs all of its checks, and only then writes. A LedgerError raised
from any method means nothing was written (apart from the dedup sweep, which
is part of the check itself).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.errors import ErrorKind, LedgerError
from ..core.ids import ZERO_ID, is_zero
from ..core.messages import (
    AdminAdded,
    AdminRemoved,
    Approved,
    Balance,
    Config,
    ContractAdded,
    ExternalLinks,
    InitFt,
    Minted,
    Transferred,
    TransferredToUsers,
)
from .admins import AdminRegistry
from .allowances import AllowanceBook
from .balances import Ledger
from .tx_tracker import TxTracker

MAX_DECIMALS = 100
MAX_DESCRIPTION_CHARS = 500


def validate_init(init: InitFt) -> None:
    """
    Raises:
        LedgerError(DescriptionError): description longer than 500 characters
        LedgerError(DecimalsError): decimals above 100
    """
    if len(init.description) > MAX_DESCRIPTION_CHARS:
        raise LedgerError(ErrorKind.DESCRIPTION_ERROR)
    if init.decimals > MAX_DECIMALS:
        raise LedgerError(ErrorKind.DECIMALS_ERROR)


@dataclass
class FungibleToken:
    name: str = ""
    symbol: str = ""
    decimals: int = 0
    description: str = ""
    external_links: ExternalLinks = field(default_factory=ExternalLinks)
    config: Config = field(default_factory=Config)
    ledger: Ledger = field(default_factory=Ledger)
    allowances: AllowanceBook = field(default_factory=AllowanceBook)
    admins: AdminRegistry = field(default_factory=AdminRegistry)
    txs: TxTracker = field(default_factory=TxTracker)

    @staticmethod
    def from_init(init: InitFt) -> "FungibleToken":
        """
        Build the initial token: the whole initial supply goes to the admin.

        Raises:
            LedgerError: If the init payload fails validation
        """
        validate_init(init)
        token = FungibleToken(
            name=init.name,
            symbol=init.symbol,
            decimals=init.decimals,
            description=init.description,
            external_links=init.external_links,
            config=init.config,
            admins=AdminRegistry(admins=[init.admin]),
        )
        token.ledger.mint(init.admin, init.initial_supply)
        return token

    # --- ledger ---

    def mint(self, caller: str, amount: int, to: str) -> Minted:
        self.admins.require_admin(caller)
        self.ledger.mint(to, amount)
        return Minted(to=to, amount=amount)

    def burn(self, caller: str, amount: int) -> Transferred:
        self.ledger.burn(caller, amount)
        return Transferred(from_=caller, to=ZERO_ID, amount=amount)

    def transfer(
        self,
        caller: str,
        from_: str,
        to: str,
        amount: int,
        now: int,
        tx_id: Optional[int] = None,
    ) -> Transferred:
        if is_zero(from_) or is_zero(to):
            raise LedgerError(ErrorKind.ZERO_ADDRESS)
        if tx_id is not None:
            self.txs.check(caller, tx_id, now)

        self.ledger.check_balance(from_, amount)
        if not self.admins.is_trusted(caller):
            self.allowances.can_transfer(caller, from_, amount)

        self.ledger.move(from_, to, amount)
        if tx_id is not None:
            self.txs.record(caller, tx_id, now, self.config.tx_storage_period)
        return Transferred(from_=from_, to=to, amount=amount)

    def transfer_to_users(self, caller: str, amount: int, to_users: List[str]) -> TransferredToUsers:
        self.admins.require_admin(caller)
        self.ledger.check_balance(caller, amount * len(to_users))

        for to in to_users:
            self.ledger.move(caller, to, amount)
        return TransferredToUsers(from_=caller, to_users=list(to_users), amount=amount)

    def balance_of(self, account: str) -> Balance:
        return Balance(amount=self.ledger.balance_of(account))

    # --- allowances ---

    def approve(
        self,
        caller: str,
        spender: str,
        amount: int,
        now: int,
        tx_id: Optional[int] = None,
    ) -> Approved:
        if is_zero(spender):
            raise LedgerError(ErrorKind.ZERO_ADDRESS)
        if tx_id is not None:
            self.txs.check(caller, tx_id, now)

        self.allowances.approve(caller, spender, amount)
        if tx_id is not None:
            self.txs.record(caller, tx_id, now, self.config.tx_storage_period)
        return Approved(from_=caller, to=spender, amount=amount)

    # --- admins ---

    def add_admin(self, caller: str, admin_id: str) -> AdminAdded:
        self.admins.add(caller, admin_id)
        return AdminAdded(admin_id=admin_id)

    def delete_admin(self, caller: str, admin_id: str) -> AdminRemoved:
        self.admins.remove(caller, admin_id)
        return AdminRemoved(admin_id=admin_id)

    def add_contract(self, caller: str, contract_id: str) -> ContractAdded:
        self.admins.set_trusted_contract(caller, contract_id)
        return ContractAdded(contract_id=contract_id)

    # --- state ---

    def supply_is_conserved(self) -> bool:
        return self.ledger.current_supply == self.ledger.total_of_balances()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "description": self.description,
            "external_links": self.external_links.model_dump(),
            "config": self.config.model_dump(),
            "ledger": self.ledger.to_dict(),
            "allowances": self.allowances.to_dict(),
            "admins": self.admins.to_dict(),
            "txs": self.txs.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FungibleToken":
        data = data or {}
        return FungibleToken(
            name=data.get("name", ""),
            symbol=data.get("symbol", ""),
            decimals=int(data.get("decimals", 0)),
            description=data.get("description", ""),
            external_links=ExternalLinks(**data.get("external_links", {})),
            config=Config(**data.get("config", {})),
            ledger=Ledger.from_dict(data.get("ledger", {})),
            allowances=AllowanceBook.from_dict(data.get("allowances", {})),
            admins=AdminRegistry.from_dict(data.get("admins", {})),
            txs=TxTracker.from_dict(data.get("txs", {})),
        )
