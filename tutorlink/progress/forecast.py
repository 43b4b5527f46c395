"""Curriculum completion forecast.

A package's duration covers a fixed window of units: each unit is expected to
take `days_per_unit` calendar days (two-week lesson blocks by default, set by
FORECAST_DAYS_PER_UNIT). Starting from the unit of the child's first report,
the forecast walks active units in order until the window is filled.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from tutorlink.db.models import Unit


@dataclass(frozen=True)
class CompletionProjection:
    starting_unit: Unit
    last_unit: Unit
    total_units_to_complete: int
    days_to_completion: int
    weeks_to_completion: float
    estimated_completion_date: date

    @property
    def message(self) -> str:
        return (
            f"Child will complete {self.last_unit.unit_name} (Unit {self.last_unit.unit_order}) "
            f"by approximately {self.estimated_completion_date:%B %d, %Y}"
        )


def units_per_window(duration_days: int | None, days_per_unit: int) -> int | None:
    """Number of units a package duration covers.

    Returns:
        None when the package has no duration (no window limit), otherwise
        duration_days // days_per_unit, never less than 1
    """
    if duration_days is None:
        return None
    return max(1, duration_days // days_per_unit)


def remaining_units(units: Sequence[Unit], starting_order: int, window: int | None) -> list[Unit]:
    """Active units from starting_order onward, ordered, capped at window."""
    candidates = sorted(
        (u for u in units if u.is_active and u.unit_order >= starting_order),
        key=lambda u: u.unit_order,
    )
    return candidates if window is None else candidates[:window]


def project_completion(
    starting_unit: Unit,
    units: Sequence[Unit],
    start_date: date,
    duration_days: int | None,
    days_per_unit: int,
) -> CompletionProjection | None:
    """Project when the child finishes the units its package covers.

    Args:
        starting_unit: Unit of the child's oldest report
        units: Units of the starting unit's curriculum
        start_date: Date of the child's oldest report
        duration_days: Package duration (None means no window limit)
        days_per_unit: Calendar days one unit takes

    Returns:
        CompletionProjection, or None when no active unit remains from the
        starting order onward
    """
    window = units_per_window(duration_days, days_per_unit)
    covered = remaining_units(units, starting_unit.unit_order, window)
    if not covered:
        return None

    total_units = len(covered)
    total_days = total_units * days_per_unit
    return CompletionProjection(
        starting_unit=starting_unit,
        last_unit=covered[-1],
        total_units_to_complete=total_units,
        days_to_completion=total_days,
        weeks_to_completion=round(total_days / 7.0, 2),
        estimated_completion_date=start_date + timedelta(days=total_days),
    )
