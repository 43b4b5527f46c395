"""Tests for the completion forecast."""

from datetime import date

import pytest

from tutorlink.db.models import Unit
from tutorlink.progress.forecast import project_completion, remaining_units, units_per_window


def _units(count: int, inactive: tuple[int, ...] = ()) -> list[Unit]:
    return [
        Unit(
            id=f"unit-{order}",
            curriculum_id="curriculum-1",
            unit_name=f"Fractions {order}",
            unit_order=order,
            is_active=order not in inactive,
        )
        for order in range(1, count + 1)
    ]


class TestUnitsPerWindow:
    @pytest.mark.parametrize(
        ("duration_days", "expected"),
        [(42, 3), (14, 1), (27, 1), (5, 1), (90, 6), (None, None)],
    )
    def test_two_week_blocks(self, duration_days, expected):
        assert units_per_window(duration_days, 14) == expected

    def test_custom_ratio(self):
        assert units_per_window(42, 7) == 6


class TestRemainingUnits:
    def test_skips_inactive_and_earlier_units(self):
        units = _units(6, inactive=(3,))
        assert [u.unit_order for u in remaining_units(units, 2, window=3)] == [2, 4, 5]

    def test_no_window_takes_all(self):
        assert len(remaining_units(_units(6), 2, window=None)) == 5


class TestProjectCompletion:
    def test_forty_two_day_package(self):
        units = _units(5)

        projection = project_completion(units[0], units, date(2024, 1, 1), duration_days=42, days_per_unit=14)

        assert projection.total_units_to_complete == 3
        assert projection.days_to_completion == 42
        assert projection.weeks_to_completion == 6.0
        assert projection.last_unit.unit_order == 3
        assert projection.estimated_completion_date == date(2024, 2, 12)
        assert "Unit 3" in projection.message
        assert projection.message == "Child will complete Fractions 3 (Unit 3) by approximately February 12, 2024"

    def test_window_truncated_by_curriculum_end(self):
        units = _units(4)

        projection = project_completion(units[2], units, date(2024, 1, 1), duration_days=84, days_per_unit=14)

        assert projection.total_units_to_complete == 2
        assert projection.last_unit.unit_order == 4
        assert projection.weeks_to_completion == 4.0

    def test_fractional_weeks(self):
        units = _units(3)

        projection = project_completion(units[0], units, date(2024, 1, 1), duration_days=30, days_per_unit=10)

        assert projection.days_to_completion == 30
        assert projection.weeks_to_completion == 4.29

    def test_nothing_left(self):
        units = _units(3, inactive=(3,))
        assert project_completion(units[2], units, date(2024, 1, 1), duration_days=42, days_per_unit=14) is None
