"""Tests for wallet transactions and balances."""

from decimal import Decimal

import pytest

from tutorlink.core.errors import InvalidArgumentError, NotFoundError
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.user_repository import UserRepository
from tutorlink.repositories.wallet_transaction_repository import WalletTransactionRepository
from tutorlink.schemas.records import CreateWalletTransactionRequest
from tutorlink.services.wallet_service import WalletTransactionService


@pytest.fixture
def wallet_service(db_session) -> WalletTransactionService:
    return WalletTransactionService(
        WalletTransactionRepository(db_session),
        UserRepository(db_session),
        ContractRepository(db_session),
    )


def _create(service, parent_id, amount, transaction_type, complete=True, contract_id=None):
    transaction_id = service.create_transaction(
        CreateWalletTransactionRequest(
            parent_id=parent_id,
            contract_id=contract_id,
            amount=Decimal(amount),
            transaction_type=transaction_type,
        )
    )
    if complete:
        service.update_transaction_status(transaction_id, "completed")
    return transaction_id


def test_new_transaction_is_pending(wallet_service, factory):
    parent = factory.user()

    transaction_id = _create(wallet_service, parent.id, "100000", "deposit", complete=False)

    assert wallet_service.get_transaction_by_id(transaction_id).status == "pending"


def test_balance_counts_completed_only(wallet_service, factory):
    parent = factory.user()
    _create(wallet_service, parent.id, "500000", "deposit")
    _create(wallet_service, parent.id, "50000", "refund")
    _create(wallet_service, parent.id, "200000", "payment")
    _create(wallet_service, parent.id, "100000", "withdrawal")
    _create(wallet_service, parent.id, "999999", "deposit", complete=False)

    assert wallet_service.get_parent_wallet_balance(parent.id) == Decimal("250000")
    assert len(wallet_service.get_transactions_by_parent_id(parent.id)) == 5


def test_transaction_linked_to_contract(wallet_service, factory):
    child = factory.child()
    contract = factory.contract(child, factory.package())

    transaction_id = _create(wallet_service, child.parent_id, "1500000", "payment", contract_id=contract.id)

    assert wallet_service.get_transaction_by_id(transaction_id).contract_id == contract.id


def test_unknown_parent(wallet_service):
    with pytest.raises(InvalidArgumentError, match="Parent"):
        _create(wallet_service, "missing", "100", "deposit")


def test_unknown_contract(wallet_service, factory):
    parent = factory.user()

    with pytest.raises(InvalidArgumentError, match="Contract"):
        _create(wallet_service, parent.id, "100", "payment", contract_id="missing")


def test_missing_transaction(wallet_service):
    with pytest.raises(NotFoundError):
        wallet_service.get_transaction_by_id("missing")
    with pytest.raises(NotFoundError):
        wallet_service.update_transaction_status("missing", "completed")


def test_non_positive_amount_rejected_by_schema():
    with pytest.raises(ValueError):
        CreateWalletTransactionRequest(parent_id="p", amount=Decimal("0"), transaction_type="deposit")
