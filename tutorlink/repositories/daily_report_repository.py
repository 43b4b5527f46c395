"""Repository for daily reports."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from tutorlink.db.models import DailyReport, Unit


class DailyReportRepository:
    """Repository for daily report data access.

    Child-scoped reads eager-load the unit (and its curriculum) because the
    progress aggregator and forecaster walk those relationships.
    """

    def __init__(self, session: Session):
        self.session = session

    def _with_unit(self):
        return select(DailyReport).options(
            joinedload(DailyReport.child),
            joinedload(DailyReport.unit).joinedload(Unit.curriculum),
        )

    def get_by_id(self, report_id: str) -> DailyReport | None:
        return self.session.get(DailyReport, report_id)

    def get_oldest_by_child_id(self, child_id: str) -> DailyReport | None:
        query = (
            self._with_unit()
            .where(DailyReport.child_id == child_id)
            .order_by(DailyReport.created_date, DailyReport.id)
        )
        return self.session.execute(query).scalars().first()

    def get_by_child_id(self, child_id: str) -> list[DailyReport]:
        query = (
            self._with_unit()
            .where(DailyReport.child_id == child_id)
            .order_by(DailyReport.created_date, DailyReport.id)
        )
        return list(self.session.execute(query).scalars().all())

    def get_by_tutor_id(self, tutor_id: str) -> list[DailyReport]:
        query = select(DailyReport).where(DailyReport.tutor_id == tutor_id).order_by(DailyReport.created_date)
        return list(self.session.execute(query).scalars().all())

    def get_by_booking_id(self, booking_id: str) -> list[DailyReport]:
        query = select(DailyReport).where(DailyReport.booking_id == booking_id).order_by(DailyReport.created_date)
        return list(self.session.execute(query).scalars().all())

    def add(self, report: DailyReport) -> DailyReport:
        self.session.add(report)
        self.session.commit()
        return report

    def update(self, report: DailyReport) -> DailyReport:
        self.session.add(report)
        self.session.commit()
        return report

    def delete(self, report: DailyReport) -> None:
        self.session.delete(report)
        self.session.commit()
