"""Support request endpoints.

Edits and deletes are limited to the user who opened the request; assignment
and status changes are staff actions.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tutorlink.api.dependencies import get_current_user_id, get_support_service
from tutorlink.schemas.records import (
    AssignSupportRequest,
    CreateSupportRequest,
    SupportRequestView,
    SupportStatus,
    UpdateSupportRequest,
    UpdateSupportRequestStatus,
)
from tutorlink.services.support_service import SupportRequestService

router = APIRouter(prefix="/support-requests", tags=["support"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_support_request(
    request: CreateSupportRequest,
    service: SupportRequestService = Depends(get_support_service),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    return {"request_id": service.create_support_request(request, user_id)}


@router.get("", response_model=list[SupportRequestView])
def list_support_requests(service: SupportRequestService = Depends(get_support_service)) -> list[SupportRequestView]:
    return service.get_all_support_requests()


@router.get("/mine", response_model=list[SupportRequestView])
def list_my_support_requests(
    service: SupportRequestService = Depends(get_support_service),
    user_id: str = Depends(get_current_user_id),
) -> list[SupportRequestView]:
    return service.get_support_requests_by_user_id(user_id)


@router.get("/status/{request_status}", response_model=list[SupportRequestView])
def list_by_status(
    request_status: SupportStatus, service: SupportRequestService = Depends(get_support_service)
) -> list[SupportRequestView]:
    return service.get_support_requests_by_status(request_status)


@router.get("/{request_id}", response_model=SupportRequestView)
def get_support_request(
    request_id: str, service: SupportRequestService = Depends(get_support_service)
) -> SupportRequestView:
    support_request = service.get_support_request_by_id(request_id)
    if support_request is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Support request not found.")
    return support_request


@router.put("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_support_request(
    request_id: str,
    request: UpdateSupportRequest,
    service: SupportRequestService = Depends(get_support_service),
    user_id: str = Depends(get_current_user_id),
) -> None:
    service.update_support_request(request_id, request, user_id)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_support_request(
    request_id: str,
    service: SupportRequestService = Depends(get_support_service),
    user_id: str = Depends(get_current_user_id),
) -> None:
    service.delete_support_request(request_id, user_id)


@router.put("/{request_id}/assign", status_code=status.HTTP_204_NO_CONTENT)
def assign_support_request(
    request_id: str,
    request: AssignSupportRequest,
    service: SupportRequestService = Depends(get_support_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.assign_support_request(request_id, request)


@router.put("/{request_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_support_request_status(
    request_id: str,
    request: UpdateSupportRequestStatus,
    service: SupportRequestService = Depends(get_support_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.update_support_request_status(request_id, request)
