"""Support request handling.

Only the user who opened a request may edit or delete it. Staff assign and
move requests through open -> in_progress -> resolved/closed.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from loguru import logger

from tutorlink.core.errors import InvalidArgumentError, NotFoundError, UnauthorizedError
from tutorlink.db.models import SupportRequest
from tutorlink.repositories.support_request_repository import SupportRequestRepository
from tutorlink.repositories.user_repository import UserRepository
from tutorlink.schemas.records import (
    AssignSupportRequest,
    CreateSupportRequest,
    SupportRequestView,
    UpdateSupportRequest,
    UpdateSupportRequestStatus,
)


def _strip_or_none(value: str | None) -> str | None:
    return value.strip() if value else None


class SupportRequestService:
    def __init__(self, support_request_repository: SupportRequestRepository, user_repository: UserRepository):
        self.requests = support_request_repository
        self.users = user_repository

    def _get_owned(self, request_id: str, user_id: str) -> SupportRequest:
        support_request = self.requests.get_by_id(request_id)
        if support_request is None:
            raise NotFoundError("Support request not found.")
        if support_request.user_id != user_id:
            raise UnauthorizedError()
        return support_request

    def create_support_request(self, request: CreateSupportRequest, user_id: str) -> str:
        if not (request.subject.strip() and request.description.strip() and request.category.strip()):
            raise InvalidArgumentError("Subject, description, and category are required.")
        if not self.users.exists(user_id):
            raise NotFoundError("User not found.")

        now = datetime.now(timezone.utc)
        support_request = SupportRequest(
            id=str(uuid.uuid4()),
            user_id=user_id,
            subject=request.subject.strip(),
            description=request.description.strip(),
            category=request.category.strip(),
            status="open",
            created_at=now,
            updated_at=now,
        )
        self.requests.add(support_request)
        logger.info(f"User {user_id} opened support request {support_request.id}")
        return support_request.id

    def update_support_request(self, request_id: str, request: UpdateSupportRequest, user_id: str) -> None:
        """Edit subject, description and category.

        Raises:
            NotFoundError: If the request does not exist
            UnauthorizedError: If user_id did not open the request
        """
        support_request = self._get_owned(request_id, user_id)
        support_request.subject = request.subject.strip()
        support_request.description = request.description.strip()
        support_request.category = request.category.strip()
        support_request.updated_at = datetime.now(timezone.utc)
        self.requests.update(support_request)

    def delete_support_request(self, request_id: str, user_id: str) -> None:
        support_request = self._get_owned(request_id, user_id)
        self.requests.delete(support_request)
        logger.info(f"User {user_id} deleted support request {request_id}")

    def assign_support_request(self, request_id: str, request: AssignSupportRequest) -> None:
        support_request = self.requests.get_by_id(request_id)
        if support_request is None:
            raise NotFoundError("Support request not found.")
        if not self.users.exists(request.assigned_to_user_id):
            raise NotFoundError("Assigned user not found.")

        support_request.assigned_to_user_id = request.assigned_to_user_id
        support_request.updated_at = datetime.now(timezone.utc)
        self.requests.update(support_request)

    def update_support_request_status(self, request_id: str, request: UpdateSupportRequestStatus) -> None:
        support_request = self.requests.get_by_id(request_id)
        if support_request is None:
            raise NotFoundError("Support request not found.")

        now = datetime.now(timezone.utc)
        support_request.status = request.status
        support_request.resolution = _strip_or_none(request.resolution)
        support_request.admin_notes = _strip_or_none(request.admin_notes)
        support_request.updated_at = now
        if request.status == "resolved":
            support_request.resolved_at = now
        self.requests.update(support_request)
        logger.info(f"Support request {request_id} status -> {request.status}")

    def get_support_request_by_id(self, request_id: str) -> SupportRequestView | None:
        support_request = self.requests.get_by_id(request_id)
        return SupportRequestView.model_validate(support_request) if support_request is not None else None

    def get_all_support_requests(self) -> list[SupportRequestView]:
        return [SupportRequestView.model_validate(r) for r in self.requests.get_all()]

    def get_support_requests_by_user_id(self, user_id: str) -> list[SupportRequestView]:
        return [SupportRequestView.model_validate(r) for r in self.requests.get_by_user_id(user_id)]

    def get_support_requests_by_status(self, status: str) -> list[SupportRequestView]:
        return [SupportRequestView.model_validate(r) for r in self.requests.get_by_status(status)]
