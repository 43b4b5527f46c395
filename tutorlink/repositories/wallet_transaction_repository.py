"""Repository for wallet transactions."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from tutorlink.db.models import WalletTransaction


class WalletTransactionRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, transaction_id: str) -> WalletTransaction | None:
        return self.session.get(WalletTransaction, transaction_id)

    def get_by_parent_id(self, parent_id: str) -> list[WalletTransaction]:
        query = (
            select(WalletTransaction)
            .where(WalletTransaction.parent_id == parent_id)
            .order_by(WalletTransaction.transaction_date)
        )
        return list(self.session.execute(query).scalars().all())

    def get_all(self) -> list[WalletTransaction]:
        return list(self.session.execute(select(WalletTransaction)).scalars().all())

    def add(self, transaction: WalletTransaction) -> WalletTransaction:
        self.session.add(transaction)
        self.session.commit()
        return transaction

    def update(self, transaction: WalletTransaction) -> WalletTransaction:
        self.session.add(transaction)
        self.session.commit()
        return transaction
