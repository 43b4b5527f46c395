"""Repository for tutoring session data access.

Sessions are written in batches: the calendar generator hands over a whole
contract schedule at once. Batch writes only flush; the caller commits them
together with the owning contract.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from tutorlink.db.models import DailyReport, TutoringSession


class SessionRepository:
    """Repository for tutoring session data access."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_contract_id(self, contract_id: str) -> list[TutoringSession]:
        query = (
            select(TutoringSession)
            .where(TutoringSession.contract_id == contract_id)
            .order_by(TutoringSession.session_date, TutoringSession.start_time)
        )
        return list(self.session.execute(query).scalars().all())

    def get_all(self) -> list[TutoringSession]:
        query = select(TutoringSession).order_by(TutoringSession.session_date)
        return list(self.session.execute(query).scalars().all())

    def get_reported_ids(self, contract_id: str) -> set[str]:
        """IDs of the contract's sessions referenced by at least one daily report."""
        query = (
            select(DailyReport.booking_id)
            .join(TutoringSession, TutoringSession.id == DailyReport.booking_id)
            .where(TutoringSession.contract_id == contract_id)
            .distinct()
        )
        return set(self.session.execute(query).scalars().all())

    def add_range(self, sessions: list[TutoringSession]) -> None:
        """Stage a batch of sessions. Committed by the caller."""
        self.session.add_all(sessions)
        self.session.flush()
        logger.debug(f"Staged {len(sessions)} sessions")

    def update(self, tutoring_session: TutoringSession) -> TutoringSession:
        self.session.add(tutoring_session)
        self.session.flush()
        return tutoring_session

    def replace(self, stale: list[TutoringSession], sessions: list[TutoringSession]) -> int:
        """Delete the stale sessions and stage the new batch in the same flush.

        Returns:
            Number of sessions removed
        """
        for tutoring_session in stale:
            self.session.delete(tutoring_session)
        self.session.add_all(sessions)
        self.session.flush()
        logger.debug(f"Replaced {len(stale)} sessions with {len(sessions)}")
        return len(stale)
