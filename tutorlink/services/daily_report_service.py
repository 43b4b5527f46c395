"""Daily report CRUD."""

from __future__ import annotations

import uuid
from datetime import date

from loguru import logger

from tutorlink.core.errors import NotFoundError
from tutorlink.db.models import DailyReport
from tutorlink.repositories.daily_report_repository import DailyReportRepository
from tutorlink.schemas.records import CreateDailyReportRequest, DailyReportView, UpdateDailyReportRequest


class DailyReportService:
    def __init__(self, daily_report_repository: DailyReportRepository):
        self.reports = daily_report_repository

    def get_daily_report_by_id(self, report_id: str) -> DailyReportView:
        report = self.reports.get_by_id(report_id)
        if report is None:
            raise NotFoundError(f"Daily report with ID {report_id} not found.")
        return DailyReportView.model_validate(report)

    def get_daily_reports_by_tutor_id(self, tutor_id: str) -> list[DailyReportView]:
        return [DailyReportView.model_validate(r) for r in self.reports.get_by_tutor_id(tutor_id)]

    def get_daily_reports_by_child_id(self, child_id: str) -> list[DailyReportView]:
        return [DailyReportView.model_validate(r) for r in self.reports.get_by_child_id(child_id)]

    def get_daily_reports_by_booking_id(self, booking_id: str) -> list[DailyReportView]:
        return [DailyReportView.model_validate(r) for r in self.reports.get_by_booking_id(booking_id)]

    def create_daily_report(self, request: CreateDailyReportRequest, tutor_id: str) -> str:
        report = DailyReport(
            id=str(uuid.uuid4()),
            child_id=request.child_id,
            tutor_id=tutor_id,
            booking_id=request.booking_id,
            unit_id=request.unit_id,
            created_date=date.today(),
            on_track=request.on_track,
            have_homework=request.have_homework,
            notes=request.notes,
        )
        self.reports.add(report)
        logger.info(f"Tutor {tutor_id} filed report {report.id} for booking {request.booking_id}")
        return report.id

    def update_daily_report(self, report_id: str, request: UpdateDailyReportRequest) -> None:
        report = self.reports.get_by_id(report_id)
        if report is None:
            raise NotFoundError(f"Daily report with ID {report_id} not found.")

        if request.notes:
            report.notes = request.notes
        if request.on_track is not None:
            report.on_track = request.on_track
        if request.have_homework is not None:
            report.have_homework = request.have_homework
        if request.unit_id is not None:
            report.unit_id = request.unit_id

        self.reports.update(report)

    def delete_daily_report(self, report_id: str) -> bool:
        report = self.reports.get_by_id(report_id)
        if report is None:
            return False
        self.reports.delete(report)
        return True
