"""
Message types exchanged with the token actor.

Everything that crosses the actor boundary is a pydantic model:
- InitFt: one-time initialization payload
- actions: state-changing operations (plus BalanceOf)
- events: success payloads of replies
- queries / query replies: the read-only state channel

Actions, events and queries are tagged unions keyed by "type". The decode_*
helpers are the only place raw payloads become typed values; anything they
cannot validate is a fatal DecodeError.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from .errors import DecodeError, ErrorKind
from .ids import normalize_actor_id

U8_MAX = 2**8 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

ActorId = Annotated[str, AfterValidator(normalize_actor_id)]
U8 = Annotated[int, Field(strict=True, ge=0, le=U8_MAX)]
U64 = Annotated[int, Field(strict=True, ge=0, le=U64_MAX)]
U128 = Annotated[int, Field(strict=True, ge=0, le=U128_MAX)]
TxId = U64


class Message(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


# --- initialization ---------------------------------------------------------


class ExternalLinks(Message):
    twitter: str = ""


class Config(Message):
    """
    Ledger configuration fixed at initialization.

    tx_storage_period: logical-time span a transaction id stays remembered
    tx_payment: per-transaction fee (recorded, not charged)
    """
    tx_storage_period: U64 = 0
    tx_payment: U128 = 0


class InitFt(Message):
    name: str
    symbol: str
    decimals: U8
    description: str = ""
    external_links: ExternalLinks = Field(default_factory=ExternalLinks)
    initial_supply: U128 = 0
    admin: ActorId
    config: Config = Field(default_factory=Config)


# --- actions ----------------------------------------------------------------


class TransferToUsers(Message):
    type: Literal["TransferToUsers"] = "TransferToUsers"
    amount: U128
    to_users: List[ActorId]


class Mint(Message):
    type: Literal["Mint"] = "Mint"
    amount: U128
    to: ActorId


class Burn(Message):
    type: Literal["Burn"] = "Burn"
    amount: U128


class Transfer(Message):
    type: Literal["Transfer"] = "Transfer"
    tx_id: Optional[TxId] = None
    from_: ActorId = Field(alias="from")
    to: ActorId
    amount: U128


class Approve(Message):
    type: Literal["Approve"] = "Approve"
    tx_id: Optional[TxId] = None
    to: ActorId
    amount: U128


class BalanceOf(Message):
    type: Literal["BalanceOf"] = "BalanceOf"
    account: ActorId


class AddAdmin(Message):
    type: Literal["AddAdmin"] = "AddAdmin"
    admin_id: ActorId


class DeleteAdmin(Message):
    type: Literal["DeleteAdmin"] = "DeleteAdmin"
    admin_id: ActorId


class AddContract(Message):
    type: Literal["AddContract"] = "AddContract"
    contract_id: ActorId


Action = Annotated[
    Union[
        TransferToUsers,
        Mint,
        Burn,
        Transfer,
        Approve,
        BalanceOf,
        AddAdmin,
        DeleteAdmin,
        AddContract,
    ],
    Field(discriminator="type"),
]


# --- events -----------------------------------------------------------------


class Initialized(Message):
    type: Literal["Initialized"] = "Initialized"


class TransferredToUsers(Message):
    type: Literal["TransferredToUsers"] = "TransferredToUsers"
    from_: ActorId = Field(alias="from")
    to_users: List[ActorId]
    amount: U128


class Transferred(Message):
    type: Literal["Transferred"] = "Transferred"
    from_: ActorId = Field(alias="from")
    to: ActorId
    amount: U128


class Minted(Message):
    type: Literal["Minted"] = "Minted"
    to: ActorId
    amount: U128


class Approved(Message):
    type: Literal["Approved"] = "Approved"
    from_: ActorId = Field(alias="from")
    to: ActorId
    amount: U128


class AdminAdded(Message):
    type: Literal["AdminAdded"] = "AdminAdded"
    admin_id: ActorId


class AdminRemoved(Message):
    type: Literal["AdminRemoved"] = "AdminRemoved"
    admin_id: ActorId


class ContractAdded(Message):
    type: Literal["ContractAdded"] = "ContractAdded"
    contract_id: ActorId


class Balance(Message):
    type: Literal["Balance"] = "Balance"
    amount: int


Event = Annotated[
    Union[
        Initialized,
        TransferredToUsers,
        Transferred,
        Minted,
        Approved,
        AdminAdded,
        AdminRemoved,
        ContractAdded,
        Balance,
    ],
    Field(discriminator="type"),
]


class Reply(Message):
    """
    Result of one inbound call: exactly one of event / error is set.
    """
    event: Optional[Event] = None
    error: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "Reply":
        if (self.event is None) == (self.error is None):
            raise ValueError("a reply carries exactly one of event or error")
        return self

    @classmethod
    def success(cls, event: Any) -> "Reply":
        return cls(event=event)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "Reply":
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.ok:
            return {"ok": self.event.model_dump(by_alias=True)}
        return {"err": self.error.value}


# --- queries ----------------------------------------------------------------


class NameQuery(Message):
    type: Literal["Name"] = "Name"


class SymbolQuery(Message):
    type: Literal["Symbol"] = "Symbol"


class DecimalsQuery(Message):
    type: Literal["Decimals"] = "Decimals"


class DescriptionQuery(Message):
    type: Literal["Description"] = "Description"


class ExternalLinksQuery(Message):
    type: Literal["ExternalLinks"] = "ExternalLinks"


class CurrentSupplyQuery(Message):
    type: Literal["CurrentSupply"] = "CurrentSupply"


class BalanceOfQuery(Message):
    type: Literal["BalanceOf"] = "BalanceOf"
    account: ActorId


class AllowanceOfAccountQuery(Message):
    type: Literal["AllowanceOfAccount"] = "AllowanceOfAccount"
    account: ActorId
    approved_account: ActorId


class AdminsQuery(Message):
    type: Literal["Admins"] = "Admins"


class TxValidityTimeQuery(Message):
    type: Literal["GetTxValidityTime"] = "GetTxValidityTime"
    account: ActorId
    tx_id: TxId


class TxIdsForAccountQuery(Message):
    type: Literal["GetTxIdsForAccount"] = "GetTxIdsForAccount"
    account: ActorId


Query = Annotated[
    Union[
        NameQuery,
        SymbolQuery,
        DecimalsQuery,
        DescriptionQuery,
        ExternalLinksQuery,
        CurrentSupplyQuery,
        BalanceOfQuery,
        AllowanceOfAccountQuery,
        AdminsQuery,
        TxValidityTimeQuery,
        TxIdsForAccountQuery,
    ],
    Field(discriminator="type"),
]


class QueryReply(Message):
    """Reply on the query channel: the query type and its value."""
    type: str
    value: Any

    def to_dict(self) -> dict:
        value = self.value
        if isinstance(value, BaseModel):
            value = value.model_dump()
        return {"type": self.type, "value": value}


# --- decoding ---------------------------------------------------------------

_INIT_ADAPTER = TypeAdapter(InitFt)
_ACTION_ADAPTER = TypeAdapter(Action)
_QUERY_ADAPTER = TypeAdapter(Query)


def _decode(adapter: TypeAdapter, raw: Any, what: str) -> Any:
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except ValidationError as ex:
        raise DecodeError(f"could not decode {what}: {ex.error_count()} validation error(s)") from ex


def decode_init(raw: Any) -> InitFt:
    """Decode an initialization payload (dict, JSON text or InitFt)."""
    return _decode(_INIT_ADAPTER, raw, "init payload")


def decode_action(raw: Any) -> Any:
    """Decode an action payload (dict, JSON text or action model)."""
    return _decode(_ACTION_ADAPTER, raw, "action")


def decode_query(raw: Any) -> Any:
    """Decode a query payload (dict, JSON text or query model)."""
    return _decode(_QUERY_ADAPTER, raw, "query")
