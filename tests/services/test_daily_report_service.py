"""Tests for daily report CRUD."""

from datetime import date

import pytest

from tutorlink.core.errors import NotFoundError
from tutorlink.repositories.daily_report_repository import DailyReportRepository
from tutorlink.schemas.records import CreateDailyReportRequest, UpdateDailyReportRequest
from tutorlink.services.daily_report_service import DailyReportService


@pytest.fixture
def report_service(db_session) -> DailyReportService:
    return DailyReportService(DailyReportRepository(db_session))


def test_create_and_query(report_service, factory, enrolled_child):
    unit = factory.unit(enrolled_child["curriculum"], 1)
    booking = enrolled_child["sessions"][0]
    tutor = enrolled_child["tutor"]

    report_id = report_service.create_daily_report(
        CreateDailyReportRequest(
            child_id=enrolled_child["child"].id,
            booking_id=booking.id,
            unit_id=unit.id,
            have_homework=True,
            notes="Finished worksheet",
        ),
        tutor_id=tutor.id,
    )

    report = report_service.get_daily_report_by_id(report_id)
    assert report.tutor_id == tutor.id
    assert report.created_date == date.today()
    assert report.have_homework is True
    assert [r.id for r in report_service.get_daily_reports_by_tutor_id(tutor.id)] == [report_id]
    assert [r.id for r in report_service.get_daily_reports_by_booking_id(booking.id)] == [report_id]
    assert [r.id for r in report_service.get_daily_reports_by_child_id(enrolled_child["child"].id)] == [report_id]


def test_partial_update(report_service, factory, enrolled_child):
    unit = factory.unit(enrolled_child["curriculum"], 1)
    report = factory.report(
        enrolled_child["child"], enrolled_child["tutor"], enrolled_child["sessions"][0], unit, date(2024, 1, 1)
    )

    report_service.update_daily_report(report.id, UpdateDailyReportRequest(on_track=False))

    updated = report_service.get_daily_report_by_id(report.id)
    assert updated.on_track is False
    assert updated.have_homework is False
    assert updated.unit_id == unit.id


def test_missing_report(report_service):
    with pytest.raises(NotFoundError):
        report_service.get_daily_report_by_id("missing")
    with pytest.raises(NotFoundError):
        report_service.update_daily_report("missing", UpdateDailyReportRequest(notes="x"))
    assert report_service.delete_daily_report("missing") is False
