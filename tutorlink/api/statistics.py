"""Dashboard statistics endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from tutorlink.api.dependencies import get_statistics_service
from tutorlink.schemas.statistics import (
    ContractStatistics,
    ScoreStatistics,
    SessionStatistics,
    SessionTrend,
    WalletStatistics,
)
from tutorlink.services.statistics_service import StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/sessions", response_model=SessionStatistics)
def session_statistics(service: StatisticsService = Depends(get_statistics_service)) -> SessionStatistics:
    return service.get_session_statistics()


@router.get("/sessions/trend", response_model=SessionTrend)
def session_trend(
    start_date: date, end_date: date, service: StatisticsService = Depends(get_statistics_service)
) -> SessionTrend:
    return service.get_session_trend(start_date, end_date)


@router.get("/contracts", response_model=ContractStatistics)
def contract_statistics(service: StatisticsService = Depends(get_statistics_service)) -> ContractStatistics:
    return service.get_contract_statistics()


@router.get("/wallet", response_model=WalletStatistics)
def wallet_statistics(service: StatisticsService = Depends(get_statistics_service)) -> WalletStatistics:
    return service.get_wallet_statistics()


@router.get("/scores", response_model=ScoreStatistics)
def score_statistics(service: StatisticsService = Depends(get_statistics_service)) -> ScoreStatistics:
    return service.get_score_statistics()
