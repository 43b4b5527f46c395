"""Daily report endpoints. The acting user is recorded as the report's tutor."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tutorlink.api.dependencies import get_current_user_id, get_daily_report_service
from tutorlink.schemas.records import CreateDailyReportRequest, DailyReportView, UpdateDailyReportRequest
from tutorlink.services.daily_report_service import DailyReportService

router = APIRouter(prefix="/daily-reports", tags=["daily-reports"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_daily_report(
    request: CreateDailyReportRequest,
    service: DailyReportService = Depends(get_daily_report_service),
    tutor_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    return {"report_id": service.create_daily_report(request, tutor_id)}


@router.get("/{report_id}", response_model=DailyReportView)
def get_daily_report(report_id: str, service: DailyReportService = Depends(get_daily_report_service)) -> DailyReportView:
    return service.get_daily_report_by_id(report_id)


@router.get("/tutor/{tutor_id}", response_model=list[DailyReportView])
def list_by_tutor(tutor_id: str, service: DailyReportService = Depends(get_daily_report_service)) -> list[DailyReportView]:
    return service.get_daily_reports_by_tutor_id(tutor_id)


@router.get("/child/{child_id}", response_model=list[DailyReportView])
def list_by_child(child_id: str, service: DailyReportService = Depends(get_daily_report_service)) -> list[DailyReportView]:
    return service.get_daily_reports_by_child_id(child_id)


@router.get("/booking/{booking_id}", response_model=list[DailyReportView])
def list_by_booking(
    booking_id: str, service: DailyReportService = Depends(get_daily_report_service)
) -> list[DailyReportView]:
    return service.get_daily_reports_by_booking_id(booking_id)


@router.put("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_daily_report(
    report_id: str,
    request: UpdateDailyReportRequest,
    service: DailyReportService = Depends(get_daily_report_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.update_daily_report(report_id, request)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_daily_report(
    report_id: str,
    service: DailyReportService = Depends(get_daily_report_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    if not service.delete_daily_report(report_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Daily report not found.")
