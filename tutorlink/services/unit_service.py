"""Curriculum unit management."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from loguru import logger

from tutorlink.core.errors import InvalidArgumentError, NotFoundError
from tutorlink.db.models import Unit
from tutorlink.repositories.curriculum_repository import CurriculumRepository
from tutorlink.repositories.unit_repository import UnitRepository
from tutorlink.schemas.records import CreateUnitRequest, UnitView, UpdateUnitRequest


class UnitService:
    def __init__(self, unit_repository: UnitRepository, curriculum_repository: CurriculumRepository):
        self.units = unit_repository
        self.curricula = curriculum_repository

    def create_unit(self, request: CreateUnitRequest) -> str:
        """Add a unit to a curriculum.

        The unit order defaults to one past the highest order in the curriculum.

        Raises:
            InvalidArgumentError: Blank name, duplicate name or taken order
            NotFoundError: If the curriculum does not exist
        """
        name = request.unit_name.strip()
        if not name:
            raise InvalidArgumentError("Unit name is required.")
        if not self.curricula.exists(request.curriculum_id):
            raise NotFoundError("Curriculum not found.")
        if self.units.exists_by_name(name, request.curriculum_id):
            raise InvalidArgumentError(f"Unit with name '{name}' already exists in this curriculum.")

        if request.unit_order is None:
            unit_order = self.units.get_max_unit_order(request.curriculum_id) + 1
        else:
            unit_order = request.unit_order
            if self.units.exists_by_order(unit_order, request.curriculum_id):
                raise InvalidArgumentError(f"Unit order {unit_order} is already used in this curriculum.")

        unit = Unit(
            id=str(uuid.uuid4()),
            curriculum_id=request.curriculum_id,
            unit_name=name,
            unit_description=request.unit_description.strip() if request.unit_description else None,
            unit_order=unit_order,
            is_active=request.is_active,
            created_at=datetime.now(timezone.utc),
        )
        self.units.add(unit)
        logger.info(f"Created unit {unit.id} '{name}' at order {unit_order} in curriculum {request.curriculum_id}")
        return unit.id

    def update_unit(self, unit_id: str, request: UpdateUnitRequest) -> None:
        """Rename, reorder or toggle a unit.

        Name and order stay unique within the unit's own curriculum.

        Raises:
            InvalidArgumentError: Blank name, duplicate name or taken order
            NotFoundError: If the unit does not exist
        """
        name = request.unit_name.strip()
        if not name:
            raise InvalidArgumentError("Unit name is required.")

        unit = self.units.get_by_id(unit_id)
        if unit is None:
            raise NotFoundError("Unit not found.")

        if self.units.exists_by_name(name, unit.curriculum_id, exclude_unit_id=unit_id):
            raise InvalidArgumentError(f"Unit with name '{name}' already exists in this curriculum.")
        if self.units.exists_by_order(request.unit_order, unit.curriculum_id, exclude_unit_id=unit_id):
            raise InvalidArgumentError(f"Unit order {request.unit_order} is already used in this curriculum.")

        unit.unit_name = name
        unit.unit_description = request.unit_description.strip() if request.unit_description else None
        unit.unit_order = request.unit_order
        unit.is_active = request.is_active
        unit.updated_at = datetime.now(timezone.utc)
        self.units.update(unit)
        logger.info(f"Updated unit {unit_id}")

    def delete_unit(self, unit_id: str) -> None:
        unit = self.units.get_by_id(unit_id)
        if unit is None:
            raise NotFoundError("Unit not found.")
        self.units.delete(unit)
        logger.info(f"Deleted unit {unit_id}")

    def get_unit_by_id(self, unit_id: str) -> UnitView | None:
        unit = self.units.get_by_id(unit_id)
        return UnitView.model_validate(unit) if unit is not None else None

    def get_units_by_curriculum_id(self, curriculum_id: str) -> list[UnitView]:
        return [UnitView.model_validate(u) for u in self.units.get_by_curriculum_id(curriculum_id)]

    def get_unit_by_name(self, unit_name: str) -> UnitView | None:
        unit = self.units.get_by_name(unit_name)
        return UnitView.model_validate(unit) if unit is not None else None
