"""Progress and forecast response models."""

from datetime import date

from pydantic import BaseModel


class UnitProgressDetail(BaseModel):
    unit_id: str
    unit_name: str | None = None
    unit_order: int | None = None
    times_learned: int
    has_homework: bool
    on_track: bool
    on_track_ratio: float
    first_learned: date
    last_learned: date
    days_since_learned: int


class ChildUnitProgress(BaseModel):
    child_id: str
    child_name: str | None = None
    total_units_learned: int
    unique_lessons_completed: int
    units_progress: list[UnitProgressDetail]
    first_lesson_date: date
    last_lesson_date: date
    percentage_of_curriculum_completed: float | None = None
    message: str


class LearningCompletionForecast(BaseModel):
    child_id: str
    child_name: str | None = None
    curriculum_id: str
    curriculum_name: str | None = None
    starting_unit_id: str
    starting_unit_name: str
    starting_unit_order: int
    last_unit_id: str
    last_unit_name: str
    last_unit_order: int
    total_units_to_complete: int
    start_date: date
    estimated_completion_date: date
    days_to_completion: int
    weeks_to_completion: float
    message: str
