"""Child progress and completion forecast endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tutorlink.api.dependencies import get_progress_service
from tutorlink.schemas.progress import ChildUnitProgress, LearningCompletionForecast
from tutorlink.services.progress_service import ProgressService

router = APIRouter(tags=["progress"])


@router.get("/contracts/{contract_id}/unit-progress", response_model=ChildUnitProgress)
def get_child_unit_progress(
    contract_id: str,
    service: ProgressService = Depends(get_progress_service),
) -> ChildUnitProgress:
    return service.get_child_unit_progress(contract_id)


@router.get("/children/{child_id}/completion-forecast", response_model=LearningCompletionForecast)
def get_learning_completion_forecast(
    child_id: str,
    service: ProgressService = Depends(get_progress_service),
) -> LearningCompletionForecast:
    return service.get_learning_completion_forecast(child_id)
