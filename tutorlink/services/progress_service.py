"""Read-only progress views computed from session and report history."""

from __future__ import annotations

from datetime import date

from loguru import logger

from tutorlink.config.settings import Settings, settings as default_settings
from tutorlink.core.errors import NotFoundError
from tutorlink.progress.aggregator import aggregate_unit_progress
from tutorlink.progress.forecast import project_completion
from tutorlink.repositories.contract_repository import ContractRepository
from tutorlink.repositories.daily_report_repository import DailyReportRepository
from tutorlink.repositories.package_repository import PackageRepository
from tutorlink.repositories.session_repository import SessionRepository
from tutorlink.repositories.unit_repository import UnitRepository
from tutorlink.schemas.progress import ChildUnitProgress, LearningCompletionForecast


class ProgressService:
    """Unit progress and completion forecast for a child."""

    def __init__(
        self,
        contract_repository: ContractRepository,
        session_repository: SessionRepository,
        daily_report_repository: DailyReportRepository,
        unit_repository: UnitRepository,
        package_repository: PackageRepository,
        app_settings: Settings | None = None,
    ):
        self.contracts = contract_repository
        self.sessions = session_repository
        self.reports = daily_report_repository
        self.units = unit_repository
        self.packages = package_repository
        self.settings = app_settings or default_settings

    def get_child_unit_progress(self, contract_id: str, today: date | None = None) -> ChildUnitProgress:
        """Summarize what the contract's child has learned, unit by unit.

        Args:
            contract_id: Contract whose child is inspected
            today: Reference date for days-since figures (defaults to today)

        Raises:
            NotFoundError: Contract, child, sessions or reports missing
        """
        contract = self.contracts.get_by_id(contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")
        child = contract.child
        if child is None:
            raise NotFoundError(f"Child not found for contract {contract_id}.")

        if not self.sessions.get_by_contract_id(contract_id):
            raise NotFoundError(f"No sessions found for contract {contract_id}.")

        reports = self.reports.get_by_child_id(child.id)
        if not reports:
            raise NotFoundError(f"No daily reports found for child with ID {child.id}.")

        summary = aggregate_unit_progress(reports, today=today)
        logger.bind(contract_id=contract_id).debug(
            f"Aggregated {summary.unique_lessons_completed} reports into {summary.total_units_learned} units"
        )
        percentage = self._curriculum_percentage(child.id, summary.total_units_learned)

        return ChildUnitProgress(
            child_id=child.id,
            child_name=child.full_name,
            total_units_learned=summary.total_units_learned,
            unique_lessons_completed=summary.unique_lessons_completed,
            units_progress=summary.units_progress,
            first_lesson_date=summary.first_lesson_date,
            last_lesson_date=summary.last_lesson_date,
            percentage_of_curriculum_completed=percentage,
            message=(
                f"{child.full_name} has learned {summary.total_units_learned} units "
                f"across {summary.unique_lessons_completed} lessons"
            ),
        )

    def _curriculum_percentage(self, child_id: str, units_learned: int) -> float | None:
        """Share of the forecast window already learned, capped at 100.

        None when the child has no forecast (no package or no active units).
        """
        try:
            forecast = self.get_learning_completion_forecast(child_id)
        except NotFoundError as e:
            logger.debug(f"No completion forecast for child {child_id}: {e.message}")
            return None
        return round(min(100.0, units_learned / forecast.total_units_to_complete * 100), 2)

    def get_learning_completion_forecast(self, child_id: str) -> LearningCompletionForecast:
        """Forecast when the child completes the units its package covers.

        Raises:
            NotFoundError: No report history, no active units from the starting
                unit onward, or no package for the curriculum
        """
        oldest = self.reports.get_oldest_by_child_id(child_id)
        if oldest is None:
            raise NotFoundError(f"No daily reports found for child with ID {child_id}.")

        starting_unit = oldest.unit
        if starting_unit is None:
            raise NotFoundError(f"Starting unit not found for report {oldest.id}.")
        curriculum_id = starting_unit.curriculum_id

        units = self.units.get_by_curriculum_id(curriculum_id, active_only=True)
        if not units:
            raise NotFoundError(f"No active units found in curriculum with ID {curriculum_id}.")

        package = self.packages.get_package_by_curriculum_id(curriculum_id)
        if package is None:
            raise NotFoundError(f"No package found for curriculum with ID {curriculum_id}.")

        projection = project_completion(
            starting_unit=starting_unit,
            units=units,
            start_date=oldest.created_date,
            duration_days=package.duration_days,
            days_per_unit=self.settings.forecast_days_per_unit,
        )
        if projection is None:
            raise NotFoundError(f"No active units found in curriculum with ID {curriculum_id}.")

        curriculum = starting_unit.curriculum
        return LearningCompletionForecast(
            child_id=child_id,
            child_name=oldest.child.full_name if oldest.child else None,
            curriculum_id=curriculum_id,
            curriculum_name=curriculum.curriculum_name if curriculum else None,
            starting_unit_id=starting_unit.id,
            starting_unit_name=starting_unit.unit_name,
            starting_unit_order=starting_unit.unit_order,
            last_unit_id=projection.last_unit.id,
            last_unit_name=projection.last_unit.unit_name,
            last_unit_order=projection.last_unit.unit_order,
            total_units_to_complete=projection.total_units_to_complete,
            start_date=oldest.created_date,
            estimated_completion_date=projection.estimated_completion_date,
            days_to_completion=projection.days_to_completion,
            weeks_to_completion=projection.weeks_to_completion,
            message=projection.message,
        )
