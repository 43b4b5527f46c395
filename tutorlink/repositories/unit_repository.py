"""Repository for curriculum units.

Units are always returned ordered by unit_order.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tutorlink.db.models import Unit


class UnitRepository:
    """Repository for curriculum unit data access."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, unit_id: str) -> Unit | None:
        return self.session.get(Unit, unit_id)

    def get_by_curriculum_id(self, curriculum_id: str, active_only: bool = False) -> list[Unit]:
        query = select(Unit).where(Unit.curriculum_id == curriculum_id)
        if active_only:
            query = query.where(Unit.is_active == True)  # noqa: E712
        return list(self.session.execute(query.order_by(Unit.unit_order)).scalars().all())

    def get_max_unit_order(self, curriculum_id: str) -> int:
        """Highest unit_order in the curriculum, 0 when it has no units."""
        value = self.session.execute(
            select(func.max(Unit.unit_order)).where(Unit.curriculum_id == curriculum_id)
        ).scalar()
        return value or 0

    def exists_by_name(self, unit_name: str, curriculum_id: str, exclude_unit_id: str | None = None) -> bool:
        query = select(Unit.id).where(Unit.curriculum_id == curriculum_id, Unit.unit_name == unit_name.strip())
        if exclude_unit_id is not None:
            query = query.where(Unit.id != exclude_unit_id)
        return self.session.execute(query).first() is not None

    def exists_by_order(self, unit_order: int, curriculum_id: str, exclude_unit_id: str | None = None) -> bool:
        query = select(Unit.id).where(Unit.curriculum_id == curriculum_id, Unit.unit_order == unit_order)
        if exclude_unit_id is not None:
            query = query.where(Unit.id != exclude_unit_id)
        return self.session.execute(query).first() is not None

    def get_by_name(self, unit_name: str) -> Unit | None:
        query = select(Unit).where(Unit.unit_name == unit_name.strip()).order_by(Unit.unit_order)
        return self.session.execute(query).scalars().first()

    def add(self, unit: Unit) -> Unit:
        self.session.add(unit)
        self.session.commit()
        return unit

    def update(self, unit: Unit) -> Unit:
        self.session.add(unit)
        self.session.commit()
        return unit

    def delete(self, unit: Unit) -> None:
        self.session.delete(unit)
        self.session.commit()
