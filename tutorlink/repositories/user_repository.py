"""Repository for users (read side only; accounts are managed elsewhere)."""

from __future__ import annotations

from sqlalchemy.orm import Session

from tutorlink.db.models import User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def exists(self, user_id: str) -> bool:
        return self.get_by_id(user_id) is not None
