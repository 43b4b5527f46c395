"""Repository for contract data access.

Writes are staged with flush(); commit() persists a contract and its session
batch as one unit.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from tutorlink.db.models import Contract

_DETAILS = (
    joinedload(Contract.child),
    joinedload(Contract.package),
    joinedload(Contract.main_tutor),
    joinedload(Contract.center),
)


class ContractRepository:
    """Repository for contract data access."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, contract_id: str) -> Contract | None:
        return self.session.get(Contract, contract_id)

    def get_by_id_with_package(self, contract_id: str) -> Contract | None:
        query = select(Contract).options(joinedload(Contract.package)).where(Contract.id == contract_id)
        return self.session.execute(query).scalars().first()

    def get_by_parent_id(self, parent_id: str) -> list[Contract]:
        query = (
            select(Contract)
            .options(*_DETAILS)
            .where(Contract.parent_id == parent_id)
            .order_by(Contract.created_at, Contract.id)
        )
        return list(self.session.execute(query).scalars().unique().all())

    def get_all_with_details(self) -> list[Contract]:
        query = select(Contract).options(*_DETAILS).order_by(Contract.created_at, Contract.id)
        return list(self.session.execute(query).scalars().unique().all())

    def count_by_status(self) -> dict[str, int]:
        rows = self.session.execute(select(Contract.status, func.count(Contract.id)).group_by(Contract.status)).all()
        return {status: count for status, count in rows}

    def add(self, contract: Contract) -> Contract:
        self.session.add(contract)
        self.session.flush()
        return contract

    def update(self, contract: Contract) -> Contract:
        contract.updated_at = datetime.now(timezone.utc)
        self.session.add(contract)
        self.session.flush()
        return contract

    def commit(self) -> None:
        """Commit the contract together with every session staged alongside it."""
        self.session.commit()
