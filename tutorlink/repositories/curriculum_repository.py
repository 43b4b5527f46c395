"""Repository for curricula."""

from __future__ import annotations

from sqlalchemy.orm import Session

from tutorlink.db.models import Curriculum


class CurriculumRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, curriculum_id: str) -> Curriculum | None:
        return self.session.get(Curriculum, curriculum_id)

    def exists(self, curriculum_id: str) -> bool:
        return self.get_by_id(curriculum_id) is not None
