"""Contract endpoints."""

from __future__ import annotations

from datetime import date, time

from fastapi import APIRouter, Depends, Query, status

from tutorlink.api.dependencies import get_contract_service, get_current_user_id
from tutorlink.calendar.generator import SessionSlot, preview_schedule
from tutorlink.schemas.contracts import (
    AssignTutorsRequest,
    ContractView,
    CreateContractRequest,
    UpdateContractStatusRequest,
)
from tutorlink.services.contract_service import ContractService

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contract(
    request: CreateContractRequest,
    service: ContractService = Depends(get_contract_service),
    _user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    contract_id = service.create_contract(request)
    return {"contract_id": contract_id}


@router.get("", response_model=list[ContractView])
def list_contracts(service: ContractService = Depends(get_contract_service)) -> list[ContractView]:
    return service.get_all_contracts()


@router.get("/schedule-preview", response_model=list[SessionSlot])
def schedule_preview(
    start_date: date,
    end_date: date,
    days_of_week: int = Query(ge=0, le=127),
    start_time: time = Query(),
    end_time: time = Query(),
    session_count: int = Query(ge=0),
    is_online: bool = False,
) -> list[SessionSlot]:
    """Slots a contract with these parameters would get."""
    return preview_schedule(start_date, end_date, days_of_week, start_time, end_time, is_online, session_count)


@router.get("/parent/{parent_id}", response_model=list[ContractView])
def list_parent_contracts(parent_id: str, service: ContractService = Depends(get_contract_service)) -> list[ContractView]:
    return service.get_contracts_by_parent(parent_id)


@router.get("/{contract_id}", response_model=ContractView)
def get_contract(contract_id: str, service: ContractService = Depends(get_contract_service)) -> ContractView:
    return service.get_contract_by_id(contract_id)


@router.put("/{contract_id}/status")
def update_contract_status(
    contract_id: str,
    request: UpdateContractStatusRequest,
    service: ContractService = Depends(get_contract_service),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, bool]:
    return {"updated": service.update_contract_status(contract_id, request.status, user_id)}


@router.put("/{contract_id}/assign-tutors")
def assign_tutors(
    contract_id: str,
    request: AssignTutorsRequest,
    service: ContractService = Depends(get_contract_service),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, bool]:
    return {"assigned": service.assign_tutors(contract_id, request.main_tutor_id, user_id)}
