"""Dashboard statistics over sessions, contracts, wallet and test results."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date
from decimal import Decimal

from loguru import logger

from tutorlink.core.errors import InvalidArgumentError
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.result_repository import TestResultRepository
from tutorlink.repositories.session_repository import SessionRepository
from tutorlink.repositories.wallet_transaction_repository import WalletTransactionRepository
from tutorlink.schemas.statistics import (
    ContractStatistics,
    MonthlySessionCount,
    ScoreStatistics,
    SessionStatistics,
    SessionTrend,
    WalletStatistics,
)


def _month_keys(start_date: date, end_date: date) -> list[str]:
    keys = []
    year, month = start_date.year, start_date.month
    while (year, month) <= (end_date.year, end_date.month):
        keys.append(f"{year:04d}-{month:02d}")
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return keys


class StatisticsService:
    def __init__(
        self,
        session_repository: SessionRepository,
        contract_repository: ContractRepository,
        transaction_repository: WalletTransactionRepository,
        result_repository: TestResultRepository,
    ):
        self.sessions = session_repository
        self.contracts = contract_repository
        self.transactions = transaction_repository
        self.results = result_repository

    def get_session_statistics(self, today: date | None = None) -> SessionStatistics:
        today = today or date.today()
        sessions = self.sessions.get_all()
        by_status = Counter(s.status for s in sessions)
        upcoming = sum(1 for s in sessions if s.status == "scheduled" and s.session_date >= today)
        return SessionStatistics(
            total_sessions=len(sessions),
            scheduled_sessions=by_status["scheduled"],
            completed_sessions=by_status["completed"],
            cancelled_sessions=by_status["cancelled"],
            rescheduled_sessions=by_status["rescheduled"],
            upcoming_sessions=upcoming,
        )

    def get_session_trend(self, start_date: date, end_date: date) -> SessionTrend:
        """Sessions per calendar month between two dates, inclusive.

        Months without sessions are reported with a zero count.

        Raises:
            InvalidArgumentError: If end_date precedes start_date
        """
        if end_date < start_date:
            raise InvalidArgumentError("End date must be on or after start date.")

        counts = Counter(
            f"{s.session_date:%Y-%m}" for s in self.sessions.get_all() if start_date <= s.session_date <= end_date
        )
        months = [MonthlySessionCount(month=key, session_count=counts[key]) for key in _month_keys(start_date, end_date)]
        logger.debug(f"Session trend {start_date} .. {end_date}: {len(months)} months")
        return SessionTrend(months=months, total_sessions_in_period=sum(counts.values()))

    def get_contract_statistics(self) -> ContractStatistics:
        by_status = self.contracts.count_by_status()
        return ContractStatistics(total_contracts=sum(by_status.values()), by_status=by_status)

    def get_wallet_statistics(self) -> WalletStatistics:
        totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        completed = 0
        for transaction in self.transactions.get_all():
            if transaction.status != "completed":
                continue
            totals[transaction.transaction_type] += transaction.amount
            completed += 1
        return WalletStatistics(totals_by_type=dict(totals), completed_transactions=completed)

    def get_score_statistics(self) -> ScoreStatistics:
        results = self.results.get_all()
        if not results:
            return ScoreStatistics(total_tests=0)
        average = sum(r.score for r in results) / len(results)
        return ScoreStatistics(total_tests=len(results), average_score=round(average, 2))
