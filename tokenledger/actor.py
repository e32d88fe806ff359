"""
Token actor: lifecycle and operation dispatch.

The actor owns exactly one FungibleToken behind an Uninitialized -> Ready
lifecycle. It processes one message at a time to completion:

- init(payload): the single initialization transition
- handle(caller, action, now): route one action to its handler, one Reply out
- query(query): read-only state channel

Typed rejections come back as Reply values. Fatal conditions (undecodable
payload, use before init, double init, unroutable action) raise FatalError
subclasses and abort the invocation.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional

from .core.errors import (
    AlreadyInitializedError,
    DecodeError,
    InvalidTransitionError,
    LedgerError,
    NotInitializedError,
)
from .core.ids import normalize_actor_id
from .core.messages import Initialized, QueryReply, Reply, decode_action, decode_init, decode_query
from .ledger.token import FungibleToken
from .logging_config import get_logger
from .metrics import set_current_supply, track_duration, track_operation
from . import query as queries

# Handler signature: (token, caller, action, now) -> event
Handler = Callable[[FungibleToken, str, Any, int], Any]


class Lifecycle(str, Enum):
    UNINITIALIZED = "Uninitialized"
    READY = "Ready"


def on_transfer_to_users(token: FungibleToken, caller: str, action, now: int):
    return token.transfer_to_users(caller, action.amount, action.to_users)


def on_mint(token: FungibleToken, caller: str, action, now: int):
    return token.mint(caller, action.amount, action.to)


def on_burn(token: FungibleToken, caller: str, action, now: int):
    return token.burn(caller, action.amount)


def on_transfer(token: FungibleToken, caller: str, action, now: int):
    return token.transfer(caller, action.from_, action.to, action.amount, now, tx_id=action.tx_id)


def on_approve(token: FungibleToken, caller: str, action, now: int):
    return token.approve(caller, action.to, action.amount, now, tx_id=action.tx_id)


def on_balance_of(token: FungibleToken, caller: str, action, now: int):
    return token.balance_of(action.account)


def on_add_admin(token: FungibleToken, caller: str, action, now: int):
    return token.add_admin(caller, action.admin_id)


def on_delete_admin(token: FungibleToken, caller: str, action, now: int):
    return token.delete_admin(caller, action.admin_id)


def on_add_contract(token: FungibleToken, caller: str, action, now: int):
    return token.add_contract(caller, action.contract_id)


def register_handlers(actor: "TokenActor") -> None:
    actor.register("TransferToUsers", on_transfer_to_users)
    actor.register("Mint", on_mint)
    actor.register("Burn", on_burn)
    actor.register("Transfer", on_transfer)
    actor.register("Approve", on_approve)
    actor.register("BalanceOf", on_balance_of)
    actor.register("AddAdmin", on_add_admin)
    actor.register("DeleteAdmin", on_delete_admin)
    actor.register("AddContract", on_add_contract)


class TokenActor:
    """
    Message-at-a-time token actor.

    Usage:
        actor = TokenActor()
        actor.init({"name": "Gold", "symbol": "GLD", "decimals": 18, "admin": admin})
        reply = actor.handle(caller, {"type": "Burn", "amount": 5}, now=10)
    """

    def __init__(self) -> None:
        self._token: Optional[FungibleToken] = None
        self._handlers: Dict[str, Handler] = {}
        register_handlers(self)

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.UNINITIALIZED if self._token is None else Lifecycle.READY

    @property
    def token(self) -> FungibleToken:
        """
        Raises:
            NotInitializedError: If the actor has not been initialized
        """
        if self._token is None:
            raise NotInitializedError("the token actor is not initialized")
        return self._token

    def register(self, action_type: str, handler: Handler) -> None:
        """
        Register an action handler.

        Args:
            action_type: Action "type" tag
            handler: Function (token, caller, action, now) -> event
        """
        self._handlers[action_type] = handler

    def init(self, payload: Any) -> Reply:
        """
        Initialize the actor from an InitFt payload.

        On a validation error the actor stays Uninitialized and the error is
        returned as a reply.

        Raises:
            DecodeError: If the payload cannot be decoded
            AlreadyInitializedError: If the actor is already Ready
        """
        logger = get_logger(__name__)
        init = decode_init(payload)
        if self._token is not None:
            logger.error("Rejected second initialization")
            raise AlreadyInitializedError("the token actor is already initialized")

        try:
            token = FungibleToken.from_init(init)
        except LedgerError as ex:
            logger.warning(f"Initialization rejected: {ex.kind.value}")
            track_operation("Init", ex.kind.value)
            return Reply.failure(ex.kind)

        self._token = token
        set_current_supply(token.ledger.current_supply)
        track_operation("Init", "ok")
        logger.info(
            f"Initialized {token.symbol} with supply {token.ledger.current_supply} "
            f"for admin {init.admin}"
        )
        return Reply.success(Initialized())

    def handle(self, caller: str, payload: Any, now: int) -> Reply:
        """
        Process one action from caller at logical time now.

        Raises:
            DecodeError: If caller or payload cannot be decoded
            NotInitializedError: If the actor has not been initialized
            InvalidTransitionError: If no handler is registered for the action
        """
        caller = _decode_caller(caller)
        action = decode_action(payload)
        logger = get_logger(__name__, trace_id=caller)

        if self._token is None:
            logger.error(f"{action.type} received before initialization")
            raise NotInitializedError("the token actor is not initialized")

        handler = self._handlers.get(action.type)
        if handler is None:
            raise InvalidTransitionError(f"No handler for action type: {action.type}")

        with track_duration(action.type):
            try:
                event = handler(self._token, caller, action, now)
            except LedgerError as ex:
                logger.warning(f"{action.type} rejected: {ex.kind.value}")
                track_operation(action.type, ex.kind.value)
                return Reply.failure(ex.kind)

        set_current_supply(self._token.ledger.current_supply)
        track_operation(action.type, "ok")
        logger.info(f"{action.type} applied at t={now}")
        return Reply.success(event)

    def query(self, payload: Any) -> QueryReply:
        """
        Answer one read-only query.

        Raises:
            DecodeError: If the query cannot be decoded
            NotInitializedError: If the actor has not been initialized
        """
        q = decode_query(payload)
        return queries.answer(self.token, q)


def _decode_caller(caller: Any) -> str:
    try:
        return normalize_actor_id(caller)
    except ValueError as ex:
        raise DecodeError(f"could not decode caller: {ex}") from ex
