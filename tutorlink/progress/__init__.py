"""Progress module - per-unit aggregation and completion forecasting."""

from tutorlink.progress.aggregator import UnitProgressSummary, aggregate_unit_progress
from tutorlink.progress.forecast import CompletionProjection, project_completion, units_per_window

__all__ = [
    "CompletionProjection",
    "UnitProgressSummary",
    "aggregate_unit_progress",
    "project_completion",
    "units_per_window",
]
