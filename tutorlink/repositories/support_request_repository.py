"""Repository for support requests."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from tutorlink.db.models import SupportRequest


class SupportRequestRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, request_id: str) -> SupportRequest | None:
        return self.session.get(SupportRequest, request_id)

    def get_all(self) -> list[SupportRequest]:
        query = select(SupportRequest).order_by(SupportRequest.created_at)
        return list(self.session.execute(query).scalars().all())

    def get_by_user_id(self, user_id: str) -> list[SupportRequest]:
        query = select(SupportRequest).where(SupportRequest.user_id == user_id).order_by(SupportRequest.created_at)
        return list(self.session.execute(query).scalars().all())

    def get_by_status(self, status: str) -> list[SupportRequest]:
        query = select(SupportRequest).where(SupportRequest.status == status).order_by(SupportRequest.created_at)
        return list(self.session.execute(query).scalars().all())

    def add(self, request: SupportRequest) -> SupportRequest:
        self.session.add(request)
        self.session.commit()
        return request

    def update(self, request: SupportRequest) -> SupportRequest:
        self.session.add(request)
        self.session.commit()
        return request

    def delete(self, request: SupportRequest) -> None:
        self.session.delete(request)
        self.session.commit()
