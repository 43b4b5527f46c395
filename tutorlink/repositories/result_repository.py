"""Repository for test results (read side, used by statistics)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from tutorlink.db.models import TestResult


class TestResultRepository:
    __test__ = False

    def __init__(self, session: Session):
        self.session = session

    def get_all(self) -> list[TestResult]:
        return list(self.session.execute(select(TestResult)).scalars().all())

    def get_by_contract_id(self, contract_id: str) -> list[TestResult]:
        query = select(TestResult).where(TestResult.contract_id == contract_id).order_by(TestResult.created_at)
        return list(self.session.execute(query).scalars().all())
