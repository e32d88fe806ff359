"""
Tests for the individual ledger stores.
"""

import pytest

from tokenledger.core.errors import ErrorKind, LedgerError
from tokenledger.core.ids import ZERO_ID, actor_id_for
from tokenledger.ledger import AdminRegistry, AllowanceBook, Ledger

A = actor_id_for("a")
B = actor_id_for("b")
C = actor_id_for("c")


def _kind(excinfo) -> ErrorKind:
    return excinfo.value.kind


# --- Ledger ---


def test_absent_account_has_zero_balance():
    assert Ledger().balance_of(A) == 0


def test_mint_and_burn_keep_supply_equal_to_balances():
    ledger = Ledger()
    ledger.mint(A, 100)
    ledger.mint(B, 50)
    ledger.burn(A, 30)

    assert ledger.balance_of(A) == 70
    assert ledger.current_supply == 120
    assert ledger.current_supply == ledger.total_of_balances()


def test_burn_more_than_balance_rejected_without_mutation():
    ledger = Ledger()
    ledger.mint(A, 10)

    with pytest.raises(LedgerError) as excinfo:
        ledger.burn(A, 11)

    assert _kind(excinfo) == ErrorKind.NOT_ENOUGH_BALANCE
    assert ledger.balance_of(A) == 10
    assert ledger.current_supply == 10


def test_move_preserves_supply():
    ledger = Ledger()
    ledger.mint(A, 10)
    ledger.move(A, B, 4)

    assert (ledger.balance_of(A), ledger.balance_of(B)) == (6, 4)
    assert ledger.current_supply == ledger.total_of_balances() == 10


def test_debit_never_drives_a_balance_negative():
    ledger = Ledger()
    ledger.mint(A, 3)

    with pytest.raises(LedgerError) as excinfo:
        ledger.move(A, B, 4)

    assert _kind(excinfo) == ErrorKind.NOT_ENOUGH_BALANCE
    assert (ledger.balance_of(A), ledger.balance_of(B)) == (3, 0)


# --- AllowanceBook ---


def test_approve_overwrites():
    book = AllowanceBook()
    book.approve(A, B, 100)
    book.approve(A, B, 30)

    assert book.allowance(A, B) == 30
    assert book.allowance(B, A) == 0


def test_owner_can_always_move_own_funds():
    book = AllowanceBook()
    book.can_transfer(A, A, 10**30)
    assert book.to_dict() == {}


def test_can_transfer_consumes_allowance():
    book = AllowanceBook()
    book.approve(A, B, 100)
    book.can_transfer(B, A, 60)
    book.can_transfer(B, A, 40)

    # consumed entries stay at zero
    assert book.allowances == {A: {B: 0}}


@pytest.mark.parametrize("approved", [None, 0, 59])
def test_can_transfer_rejects_insufficient_allowance(approved):
    book = AllowanceBook()
    if approved is not None:
        book.approve(A, B, approved)
    before = book.to_dict()

    with pytest.raises(LedgerError) as excinfo:
        book.can_transfer(B, A, 60)

    assert _kind(excinfo) == ErrorKind.NOT_ALLOWED_TO_TRANSFER
    assert book.to_dict() == before


def test_allowance_is_per_spender():
    book = AllowanceBook()
    book.approve(A, C, 100)

    with pytest.raises(LedgerError):
        book.can_transfer(B, A, 1)


# --- AdminRegistry ---


def test_add_admin_requires_admin():
    reg = AdminRegistry(admins=[A])

    with pytest.raises(LedgerError) as excinfo:
        reg.add(B, C)
    assert _kind(excinfo) == ErrorKind.NOT_ADMIN

    reg.add(A, B)
    assert reg.admins == [A, B]


def test_add_existing_admin_rejected():
    reg = AdminRegistry(admins=[A, B])

    with pytest.raises(LedgerError) as excinfo:
        reg.add(A, B)
    assert _kind(excinfo) == ErrorKind.ADMIN_ALREADY_EXISTS
    assert reg.admins == [A, B]


def test_cannot_delete_yourself():
    reg = AdminRegistry(admins=[A, B])

    with pytest.raises(LedgerError) as excinfo:
        reg.remove(A, A)
    assert _kind(excinfo) == ErrorKind.CANT_DELETE_YOURSELF
    assert reg.admins == [A, B]


def test_delete_admin_keeps_order_and_allows_single_admin():
    reg = AdminRegistry(admins=[A, B, C])
    reg.remove(A, B)
    reg.remove(A, C)

    assert reg.admins == [A]


def test_non_admin_cannot_delete():
    reg = AdminRegistry(admins=[A, B])

    with pytest.raises(LedgerError) as excinfo:
        reg.remove(C, B)
    assert _kind(excinfo) == ErrorKind.NOT_ADMIN


def test_trusted_contract_registration_is_one_shot():
    reg = AdminRegistry(admins=[A])
    assert not reg.is_trusted(C)

    with pytest.raises(LedgerError) as excinfo:
        reg.set_trusted_contract(A, ZERO_ID)
    assert _kind(excinfo) == ErrorKind.ZERO_ADDRESS

    reg.set_trusted_contract(A, C)
    assert reg.is_trusted(C)

    with pytest.raises(LedgerError) as excinfo:
        reg.set_trusted_contract(A, B)
    assert _kind(excinfo) == ErrorKind.ADMIN_ALREADY_EXISTS
    assert reg.trusted_contract == C


def test_zero_identity_is_never_trusted():
    assert not AdminRegistry(admins=[A]).is_trusted(ZERO_ID)
