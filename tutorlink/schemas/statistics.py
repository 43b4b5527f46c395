"""Statistics response models."""

from decimal import Decimal

from pydantic import BaseModel


class SessionStatistics(BaseModel):
    total_sessions: int
    scheduled_sessions: int
    completed_sessions: int
    cancelled_sessions: int
    rescheduled_sessions: int
    upcoming_sessions: int


class MonthlySessionCount(BaseModel):
    month: str  # YYYY-MM
    session_count: int


class SessionTrend(BaseModel):
    months: list[MonthlySessionCount]
    total_sessions_in_period: int


class ContractStatistics(BaseModel):
    total_contracts: int
    by_status: dict[str, int]


class WalletStatistics(BaseModel):
    totals_by_type: dict[str, Decimal]
    completed_transactions: int


class ScoreStatistics(BaseModel):
    total_tests: int
    average_score: float | None = None
