"""Curriculum unit endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tutorlink.api.dependencies import get_current_user_id, get_unit_service
from tutorlink.schemas.records import CreateUnitRequest, UnitView, UpdateUnitRequest
from tutorlink.services.unit_service import UnitService

router = APIRouter(prefix="/units", tags=["units"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_unit(
    request: CreateUnitRequest,
    service: UnitService = Depends(get_unit_service),
    _user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    return {"unit_id": service.create_unit(request)}


@router.get("/curriculum/{curriculum_id}", response_model=list[UnitView])
def list_curriculum_units(curriculum_id: str, service: UnitService = Depends(get_unit_service)) -> list[UnitView]:
    return service.get_units_by_curriculum_id(curriculum_id)


@router.get("/{unit_id}", response_model=UnitView)
def get_unit(unit_id: str, service: UnitService = Depends(get_unit_service)) -> UnitView:
    unit = service.get_unit_by_id(unit_id)
    if unit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found.")
    return unit


@router.put("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_unit(
    unit_id: str,
    request: UpdateUnitRequest,
    service: UnitService = Depends(get_unit_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.update_unit(unit_id, request)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(
    unit_id: str,
    service: UnitService = Depends(get_unit_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.delete_unit(unit_id)
