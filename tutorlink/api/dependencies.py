"""FastAPI dependencies: database session, acting user and service wiring."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from loguru import logger
from sqlalchemy.orm import Session

from tutorlink.db.session import get_db
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.curriculum_repository import CurriculumRepository
from tutorlink.repositories.daily_report_repository import DailyReportRepository
from tutorlink.repositories.package_repository import PackageRepository
from tutorlink.repositories.result_repository import TestResultRepository
from tutorlink.repositories.session_repository import SessionRepository
from tutorlink.repositories.support_request_repository import SupportRequestRepository
from tutorlink.repositories.unit_repository import UnitRepository
from tutorlink.repositories.user_repository import UserRepository
from tutorlink.repositories.wallet_transaction_repository import WalletTransactionRepository
from tutorlink.services.contract_service import ContractService
from tutorlink.services.daily_report_service import DailyReportService
from tutorlink.services.progress_service import ProgressService
from tutorlink.services.statistics_service import StatisticsService
from tutorlink.services.support_service import SupportRequestService
from tutorlink.services.unit_service import UnitService
from tutorlink.services.wallet_service import WalletTransactionService


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Acting user id from the X-User-Id header.

    Tokens are issued and verified by the gateway in front of this service.

    Raises:
        HTTPException: 401 if the header is missing
    """
    if not x_user_id:
        logger.warning("Request without X-User-Id header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id


def get_contract_service(db: Session = Depends(get_db)) -> ContractService:
    return ContractService(
        contract_repository=ContractRepository(db),
        package_repository=PackageRepository(db),
        session_repository=SessionRepository(db),
    )


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(
        contract_repository=ContractRepository(db),
        session_repository=SessionRepository(db),
        daily_report_repository=DailyReportRepository(db),
        unit_repository=UnitRepository(db),
        package_repository=PackageRepository(db),
    )


def get_daily_report_service(db: Session = Depends(get_db)) -> DailyReportService:
    return DailyReportService(DailyReportRepository(db))


def get_unit_service(db: Session = Depends(get_db)) -> UnitService:
    return UnitService(UnitRepository(db), CurriculumRepository(db))


def get_wallet_service(db: Session = Depends(get_db)) -> WalletTransactionService:
    return WalletTransactionService(
        transaction_repository=WalletTransactionRepository(db),
        user_repository=UserRepository(db),
        contract_repository=ContractRepository(db),
    )


def get_support_service(db: Session = Depends(get_db)) -> SupportRequestService:
    return SupportRequestService(SupportRequestRepository(db), UserRepository(db))


def get_statistics_service(db: Session = Depends(get_db)) -> StatisticsService:
    return StatisticsService(
        session_repository=SessionRepository(db),
        contract_repository=ContractRepository(db),
        transaction_repository=WalletTransactionRepository(db),
        result_repository=TestResultRepository(db),
    )
