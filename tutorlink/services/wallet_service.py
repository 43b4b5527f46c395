"""Wallet transactions and parent balances."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from loguru import logger

from tutorlink.core.errors import InvalidArgumentError, NotFoundError
from tutorlink.db.models import WalletTransaction
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.user_repository import UserRepository
from tutorlink.repositories.wallet_transaction_repository import WalletTransactionRepository
from tutorlink.schemas.records import CreateWalletTransactionRequest, WalletTransactionView

CREDIT_TYPES = frozenset({"deposit", "refund"})
DEBIT_TYPES = frozenset({"withdrawal", "payment"})


class WalletTransactionService:
    def __init__(
        self,
        transaction_repository: WalletTransactionRepository,
        user_repository: UserRepository,
        contract_repository: ContractRepository,
    ):
        self.transactions = transaction_repository
        self.users = user_repository
        self.contracts = contract_repository

    def get_transaction_by_id(self, transaction_id: str) -> WalletTransactionView:
        transaction = self.transactions.get_by_id(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found.")
        return WalletTransactionView.model_validate(transaction)

    def get_transactions_by_parent_id(self, parent_id: str) -> list[WalletTransactionView]:
        return [WalletTransactionView.model_validate(t) for t in self.transactions.get_by_parent_id(parent_id)]

    def create_transaction(self, request: CreateWalletTransactionRequest) -> str:
        """Record a pending wallet transaction.

        Raises:
            InvalidArgumentError: Unknown parent or contract
        """
        if self.users.get_by_id(request.parent_id) is None:
            raise InvalidArgumentError(f"Parent with ID {request.parent_id} not found.")
        if request.contract_id is not None and self.contracts.get_by_id(request.contract_id) is None:
            raise InvalidArgumentError(f"Contract with ID {request.contract_id} not found.")

        transaction = WalletTransaction(
            id=str(uuid.uuid4()),
            parent_id=request.parent_id,
            contract_id=request.contract_id,
            amount=request.amount,
            transaction_type=request.transaction_type,
            description=request.description,
            status="pending",
            payment_method=request.payment_method,
            transaction_date=datetime.now(timezone.utc),
        )
        self.transactions.add(transaction)
        logger.bind(parent_id=request.parent_id).info(
            f"Created {request.transaction_type} transaction {transaction.id} of {request.amount}"
        )
        return transaction.id

    def update_transaction_status(self, transaction_id: str, status: str) -> None:
        transaction = self.transactions.get_by_id(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found.")
        transaction.status = status
        self.transactions.update(transaction)
        logger.info(f"Transaction {transaction_id} status -> {status}")

    def get_parent_wallet_balance(self, parent_id: str) -> Decimal:
        """Balance over completed transactions: credits minus debits."""
        balance = Decimal("0")
        for transaction in self.transactions.get_by_parent_id(parent_id):
            if transaction.status != "completed":
                continue
            if transaction.transaction_type in CREDIT_TYPES:
                balance += transaction.amount
            elif transaction.transaction_type in DEBIT_TYPES:
                balance -= transaction.amount
        return balance
