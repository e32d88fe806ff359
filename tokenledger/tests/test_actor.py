"""
Tests for the token actor: lifecycle, dispatch and the query channel.
"""

import logging

import pytest

from tokenledger import Lifecycle, TokenActor
from tokenledger.core.errors import (
    AlreadyInitializedError,
    DecodeError,
    ErrorKind,
    InvalidTransitionError,
    NotInitializedError,
)
from tokenledger.core.ids import ZERO_ID, actor_id_for
from tokenledger.core.messages import Approve, Balance, ExternalLinks, Initialized, Transfer
from tokenledger.snapshot import compute_state_hash

ADMIN = actor_id_for("admin")
SPENDER = actor_id_for("spender")
BOB = actor_id_for("bob")


def init_payload(**overrides):
    payload = {
        "name": "Gold",
        "symbol": "GLD",
        "decimals": 18,
        "description": "gold-backed test token",
        "external_links": {"twitter": "@gold"},
        "initial_supply": 1000,
        "admin": ADMIN,
        "config": {"tx_storage_period": 100, "tx_payment": 0},
    }
    payload.update(overrides)
    return payload


def ready_actor() -> TokenActor:
    actor = TokenActor()
    reply = actor.init(init_payload())
    assert reply.ok
    return actor


def test_init_transitions_to_ready():
    actor = TokenActor()
    assert actor.lifecycle == Lifecycle.UNINITIALIZED

    reply = actor.init(init_payload())

    assert reply.event == Initialized()
    assert actor.lifecycle == Lifecycle.READY
    assert actor.token.ledger.balance_of(ADMIN) == 1000


def test_failed_init_stays_uninitialized():
    actor = TokenActor()

    reply = actor.init(init_payload(decimals=101))
    assert reply.error == ErrorKind.DECIMALS_ERROR
    assert actor.lifecycle == Lifecycle.UNINITIALIZED

    reply = actor.init(init_payload(description="d" * 501))
    assert reply.error == ErrorKind.DESCRIPTION_ERROR

    # a corrected payload can still initialize
    assert actor.init(init_payload()).ok


def test_second_init_is_fatal():
    actor = ready_actor()
    with pytest.raises(AlreadyInitializedError):
        actor.init(init_payload())


def test_operation_before_init_is_fatal():
    actor = TokenActor()
    with pytest.raises(NotInitializedError):
        actor.handle(ADMIN, {"type": "Burn", "amount": 1}, now=0)
    with pytest.raises(NotInitializedError):
        actor.query({"type": "Name"})


def test_undecodable_payload_is_fatal():
    actor = ready_actor()
    before = compute_state_hash(actor.token)

    with pytest.raises(DecodeError):
        actor.handle(ADMIN, {"type": "Burn", "amount": "lots"}, now=0)
    with pytest.raises(DecodeError):
        actor.handle("not-an-actor", {"type": "Burn", "amount": 1}, now=0)
    with pytest.raises(DecodeError):
        actor.init("{broken")

    assert compute_state_hash(actor.token) == before


def test_whitespace_identity_is_undecodable():
    actor = ready_actor()

    with pytest.raises(DecodeError):
        actor.handle(ADMIN, {"type": "Transfer", "from": ADMIN, "to": " " * 64, "amount": 4}, now=1)
    assert actor.token.ledger.balance_of(ADMIN) == 1000


def test_unregistered_action_is_fatal():
    actor = TokenActor()
    actor._handlers.pop("Burn")
    actor.init(init_payload())

    with pytest.raises(InvalidTransitionError):
        actor.handle(ADMIN, {"type": "Burn", "amount": 1}, now=0)


def test_handle_returns_one_reply_per_action():
    actor = ready_actor()

    assert actor.handle(ADMIN, Approve(to=SPENDER, amount=200), now=0).ok
    reply = actor.handle(SPENDER, Transfer(tx_id=7, from_=ADMIN, to=BOB, amount=150), now=1)
    assert reply.ok

    replay = actor.handle(SPENDER, Transfer(tx_id=7, from_=ADMIN, to=BOB, amount=150), now=50)
    assert replay.error == ErrorKind.TX_ALREADY_EXISTS

    assert actor.handle(BOB, {"type": "BalanceOf", "account": ADMIN}, now=51).event == Balance(amount=850)
    assert actor.handle(BOB, {"type": "BalanceOf", "account": BOB}, now=51).event == Balance(amount=150)


def test_typed_errors_for_admin_operations():
    actor = ready_actor()

    for payload in (
        {"type": "Mint", "amount": 5, "to": BOB},
        {"type": "AddAdmin", "admin_id": BOB},
        {"type": "DeleteAdmin", "admin_id": ADMIN},
        {"type": "TransferToUsers", "amount": 1, "to_users": [BOB]},
        {"type": "AddContract", "contract_id": BOB},
    ):
        assert actor.handle(BOB, payload, now=0).error == ErrorKind.NOT_ADMIN

    assert actor.handle(ADMIN, {"type": "DeleteAdmin", "admin_id": ADMIN}, now=0).error == (
        ErrorKind.CANT_DELETE_YOURSELF
    )
    assert actor.handle(ADMIN, {"type": "Transfer", "from": ADMIN, "to": ZERO_ID, "amount": 1}, now=0).error == (
        ErrorKind.ZERO_ADDRESS
    )


def test_query_channel():
    actor = ready_actor()
    actor.handle(ADMIN, {"type": "Approve", "to": SPENDER, "amount": 40}, now=0)
    actor.handle(SPENDER, {"type": "Transfer", "tx_id": 9, "from": ADMIN, "to": BOB, "amount": 15}, now=5)
    actor.handle(SPENDER, {"type": "Transfer", "tx_id": 2, "from": ADMIN, "to": BOB, "amount": 5}, now=6)
    before = compute_state_hash(actor.token)

    def q(payload):
        return actor.query(payload).value

    assert q({"type": "Name"}) == "Gold"
    assert q({"type": "Symbol"}) == "GLD"
    assert q({"type": "Decimals"}) == 18
    assert q({"type": "Description"}) == "gold-backed test token"
    assert q({"type": "ExternalLinks"}) == ExternalLinks(twitter="@gold")
    assert q({"type": "CurrentSupply"}) == 1000
    assert q({"type": "BalanceOf", "account": BOB}) == 20
    assert q({"type": "AllowanceOfAccount", "account": ADMIN, "approved_account": SPENDER}) == 20
    assert q({"type": "Admins"}) == [ADMIN]
    assert q({"type": "GetTxValidityTime", "account": SPENDER, "tx_id": 9}) == 105
    assert q({"type": "GetTxValidityTime", "account": SPENDER, "tx_id": 1}) == 0
    assert q({"type": "GetTxIdsForAccount", "account": SPENDER}) == [2, 9]
    assert q({"type": "GetTxIdsForAccount", "account": BOB}) == []

    assert compute_state_hash(actor.token) == before


def test_queries_do_not_sweep_expired_records():
    actor = ready_actor()
    actor.handle(ADMIN, {"type": "Approve", "tx_id": 1, "to": SPENDER, "amount": 1}, now=0)

    # long after expiry the record is still visible until ADMIN's next dedup call
    ids = actor.query({"type": "GetTxIdsForAccount", "account": ADMIN}).value
    assert ids == [1]

    actor.handle(ADMIN, {"type": "Approve", "tx_id": 2, "to": SPENDER, "amount": 1}, now=1000)
    assert actor.query({"type": "GetTxIdsForAccount", "account": ADMIN}).value == [2]


def test_logs_carry_caller_trace_id(caplog):
    actor = ready_actor()

    with caplog.at_level(logging.INFO, logger="tokenledger.actor"):
        actor.handle(BOB, {"type": "Burn", "amount": 1}, now=0)
        actor.handle(ADMIN, {"type": "Burn", "amount": 1}, now=0)

    rejected, applied = caplog.records[-2:]
    assert rejected.levelno == logging.WARNING
    assert rejected.trace_id == BOB
    assert "NotEnoughBalance" in rejected.getMessage()
    assert applied.levelno == logging.INFO
    assert applied.trace_id == ADMIN


def test_metrics_count_outcomes():
    from prometheus_client import REGISTRY

    from tokenledger.metrics import init_metrics

    init_metrics()
    actor = ready_actor()

    def count(outcome):
        value = REGISTRY.get_sample_value(
            "tokenledger_operations_total", {"action": "Burn", "outcome": outcome}
        )
        return value or 0.0

    ok_before, err_before = count("ok"), count("NotEnoughBalance")
    actor.handle(ADMIN, {"type": "Burn", "amount": 10}, now=0)
    actor.handle(BOB, {"type": "Burn", "amount": 10}, now=0)

    assert count("ok") == ok_before + 1
    assert count("NotEnoughBalance") == err_before + 1
    assert REGISTRY.get_sample_value("tokenledger_current_supply") == 990
