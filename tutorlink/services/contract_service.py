"""Contract lifecycle service.

Owns contract status transitions and materializes the session calendar:
- create_contract: validate, persist, generate sessions from the package count
- update_contract_status: state machine, cancellation cascades to open sessions
- assign_tutors: set the main tutor and replace the still-open sessions

All validation runs before the first repository write, and each operation
commits exactly once.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from loguru import logger

from tutorlink.calendar.generator import generate_sessions
from tutorlink.calendar.weekdays import WeekdayMask
from tutorlink.config.settings import Settings, settings as default_settings
from tutorlink.contracts.status import ContractStatus, validate_transition
from tutorlink.core.errors import InvalidArgumentError, NotFoundError
from tutorlink.db.models import Contract
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.package_repository import PackageRepository
from tutorlink.repositories.session_repository import SessionRepository
from tutorlink.schemas.contracts import ContractView, CreateContractRequest

# Session statuses that cancellation turns into "cancelled"
_OPEN_SESSION_STATUSES = frozenset({"scheduled", "rescheduled"})


def _validate_schedule(request: CreateContractRequest) -> WeekdayMask:
    mask = WeekdayMask(request.days_of_week)
    if mask.is_empty:
        raise InvalidArgumentError("At least one day of the week must be selected.")
    if request.end_date < request.start_date:
        raise InvalidArgumentError("End date must be on or after start date.")
    if request.end_time <= request.start_time:
        raise InvalidArgumentError("End time must be after start time.")
    return mask


class ContractService:
    """Contract lifecycle manager."""

    def __init__(
        self,
        contract_repository: ContractRepository,
        package_repository: PackageRepository,
        session_repository: SessionRepository,
        app_settings: Settings | None = None,
    ):
        self.contracts = contract_repository
        self.packages = package_repository
        self.sessions = session_repository
        self.settings = app_settings or default_settings

    def create_contract(self, request: CreateContractRequest) -> str:
        """Create a contract and its session calendar.

        Args:
            request: Booking request

        Returns:
            ID of the new contract

        Raises:
            InvalidArgumentError: Unknown status literal ("Invalid status.") or
                bad schedule parameters
            NotFoundError: If the package does not exist
        """
        status = ContractStatus.parse(request.status)
        mask = _validate_schedule(request)

        package = self.packages.get_by_id(request.package_id)
        if package is None:
            raise NotFoundError("Package not found.")

        contract = Contract(
            id=str(uuid.uuid4()),
            parent_id=request.parent_id,
            child_id=request.child_id,
            package_id=request.package_id,
            center_id=request.center_id,
            main_tutor_id=request.main_tutor_id,
            start_date=request.start_date,
            end_date=request.end_date,
            start_time=request.start_time,
            end_time=request.end_time,
            days_of_week=mask.value,
            is_online=request.is_online,
            offline_address=None if request.is_online else request.offline_address,
            video_call_platform=request.video_call_platform if request.is_online else None,
            reschedule_count=package.max_reschedule,
            status=status.value,
            created_at=datetime.now(timezone.utc),
        )
        self.contracts.add(contract)

        sessions = generate_sessions(
            contract_id=contract.id,
            start_date=contract.start_date,
            end_date=contract.end_date,
            days_of_week=mask,
            start_time=contract.start_time,
            end_time=contract.end_time,
            is_online=contract.is_online,
            target_count=package.session_count,
            tutor_id=contract.main_tutor_id,
        )
        self.sessions.add_range(sessions)
        self.contracts.commit()

        logger.bind(parent_id=request.parent_id).info(
            f"Created contract {contract.id} with {len(sessions)}/{package.session_count} sessions"
        )
        return contract.id

    def update_contract_status(self, contract_id: str, new_status: str, acting_user_id: str) -> bool:
        """Move a contract to a new status.

        Cancelling also cancels every open session. The status change and the
        cascade are committed together.

        Raises:
            NotFoundError: If the contract does not exist
            InvalidArgumentError: Unknown literal or illegal transition
        """
        contract = self.contracts.get_by_id(contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")

        target = ContractStatus.parse(new_status)
        current = ContractStatus.parse(contract.status)
        validate_transition(current, target)

        contract.status = target.value
        self.contracts.update(contract)

        cancelled = 0
        if target is ContractStatus.CANCELLED:
            for tutoring_session in self.sessions.get_by_contract_id(contract_id):
                if tutoring_session.status in _OPEN_SESSION_STATUSES:
                    tutoring_session.status = "cancelled"
                    self.sessions.update(tutoring_session)
                    cancelled += 1

        self.contracts.commit()

        log = logger.bind(acting_user_id=acting_user_id)
        if target is ContractStatus.CANCELLED:
            log.info(f"Cancelled {cancelled} open sessions of contract {contract_id}")
        log.info(f"Contract {contract_id} status {current.value} -> {target.value}")
        return True

    def assign_tutors(self, contract_id: str, main_tutor_id: str, acting_user_id: str) -> bool:
        """Assign the main tutor and rebuild the open part of the calendar.

        Completed and cancelled sessions, and any session a daily report points
        at, are kept. Every other scheduled or rescheduled session is replaced
        by a fresh batch for the new tutor, on dates not already taken, so the
        contract keeps its package session count. The tutor change and the
        replacement are committed together.

        Raises:
            NotFoundError: If the contract does not exist
            InvalidArgumentError: Missing tutor id or contract already closed
        """
        contract = self.contracts.get_by_id_with_package(contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")
        if not main_tutor_id:
            raise InvalidArgumentError("Main tutor id is required.")

        status = ContractStatus.parse(contract.status)
        if status.is_terminal:
            raise InvalidArgumentError(f"Cannot assign tutors to {status.value} contract.")

        existing = self.sessions.get_by_contract_id(contract.id)
        reported = self.sessions.get_reported_ids(contract.id)
        kept = [s for s in existing if s.status not in _OPEN_SESSION_STATUSES or s.id in reported]
        stale = [s for s in existing if s.status in _OPEN_SESSION_STATUSES and s.id not in reported]
        held = [s for s in kept if s.status != "cancelled"]

        sessions = generate_sessions(
            contract_id=contract.id,
            start_date=contract.start_date,
            end_date=contract.end_date,
            days_of_week=contract.days_of_week,
            start_time=contract.start_time,
            end_time=contract.end_time,
            is_online=contract.is_online,
            target_count=contract.package.session_count - len(held),
            tutor_id=main_tutor_id,
            skip_dates={s.session_date for s in held},
        )

        contract.main_tutor_id = main_tutor_id
        self.contracts.update(contract)
        removed = self.sessions.replace(stale, sessions)
        self.contracts.commit()

        logger.bind(acting_user_id=acting_user_id, main_tutor_id=main_tutor_id).info(
            f"Assigned main tutor to contract {contract_id}: kept {len(kept)}, "
            f"replaced {removed} sessions with {len(sessions)}"
        )
        return True

    def get_contract_by_id(self, contract_id: str) -> ContractView:
        contract = self.contracts.get_by_id(contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")
        return self._to_view(contract)

    def get_contracts_by_parent(self, parent_id: str) -> list[ContractView]:
        return [self._to_view(c) for c in self.contracts.get_by_parent_id(parent_id)]

    def get_all_contracts(self) -> list[ContractView]:
        return [self._to_view(c) for c in self.contracts.get_all_with_details()]

    def _to_view(self, contract: Contract) -> ContractView:
        return ContractView(
            contract_id=contract.id,
            parent_id=contract.parent_id,
            child_id=contract.child_id,
            child_name=contract.child.full_name if contract.child else None,
            package_id=contract.package_id,
            package_name=contract.package.package_name if contract.package else None,
            main_tutor_id=contract.main_tutor_id,
            main_tutor_name=contract.main_tutor.full_name if contract.main_tutor else None,
            center_id=contract.center_id,
            center_name=contract.center.name if contract.center else None,
            start_date=contract.start_date,
            end_date=contract.end_date,
            start_time=contract.start_time,
            end_time=contract.end_time,
            days_of_week=contract.days_of_week,
            days_of_week_display=WeekdayMask(contract.days_of_week).display(self.settings.weekday_locale),
            is_online=contract.is_online,
            offline_address=None if contract.is_online else contract.offline_address,
            video_call_platform=contract.video_call_platform if contract.is_online else None,
            status=contract.status,
        )
