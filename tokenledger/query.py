"""
Read-only query helpers over token state.

None of these functions mutate state. In particular GetTxValidityTime and
GetTxIdsForAccount report records as stored: an expired record stays visible
until its caller's next deduplicated operation sweeps it.
"""

from typing import Any, Callable, Dict, List

from .core.errors import InvalidTransitionError
from .core.messages import QueryReply
from .ledger.token import FungibleToken


def balance_of(token: FungibleToken, account: str) -> int:
    return token.ledger.balance_of(account)


def allowance_of_account(token: FungibleToken, account: str, approved_account: str) -> int:
    return token.allowances.allowance(account, approved_account)


def list_admins(token: FungibleToken) -> List[str]:
    return list(token.admins.admins)


def tx_validity_time(token: FungibleToken, account: str, tx_id: int) -> int:
    return token.txs.valid_until(account, tx_id)


def tx_ids_for_account(token: FungibleToken, account: str) -> List[int]:
    return token.txs.tx_ids_for(account)


_ANSWERS: Dict[str, Callable[[FungibleToken, Any], Any]] = {
    "Name": lambda t, q: t.name,
    "Symbol": lambda t, q: t.symbol,
    "Decimals": lambda t, q: t.decimals,
    "Description": lambda t, q: t.description,
    "ExternalLinks": lambda t, q: t.external_links,
    "CurrentSupply": lambda t, q: t.ledger.current_supply,
    "BalanceOf": lambda t, q: balance_of(t, q.account),
    "AllowanceOfAccount": lambda t, q: allowance_of_account(t, q.account, q.approved_account),
    "Admins": lambda t, q: list_admins(t),
    "GetTxValidityTime": lambda t, q: tx_validity_time(t, q.account, q.tx_id),
    "GetTxIdsForAccount": lambda t, q: tx_ids_for_account(t, q.account),
}


def answer(token: FungibleToken, query: Any) -> QueryReply:
    """
    Answer a decoded query.

    Raises:
        InvalidTransitionError: If the query type is unknown
    """
    fn = _ANSWERS.get(query.type)
    if fn is None:
        raise InvalidTransitionError(f"No answer for query type: {query.type}")
    return QueryReply(type=query.type, value=fn(token, query))
