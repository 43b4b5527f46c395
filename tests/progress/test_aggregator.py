"""Tests for per-unit progress aggregation."""

from datetime import date

import pytest

from tutorlink.db.models import DailyReport, Unit
from tutorlink.progress.aggregator import aggregate_unit_progress

TODAY = date(2024, 2, 1)


def _unit(unit_id: str, order: int) -> Unit:
    return Unit(id=unit_id, curriculum_id="curriculum-1", unit_name=f"Unit {order}", unit_order=order, is_active=True)


def _report(unit: Unit, created_date: date, on_track: bool = True, have_homework: bool = False) -> DailyReport:
    return DailyReport(
        child_id="child-1",
        tutor_id="tutor-1",
        booking_id="booking-1",
        unit_id=unit.id,
        unit=unit,
        created_date=created_date,
        on_track=on_track,
        have_homework=have_homework,
    )


def test_three_reports_two_units():
    """2 reports on unit A and 1 on unit B: A is listed first with 2 lessons."""
    unit_a, unit_b = _unit("a", 1), _unit("b", 2)
    reports = [
        _report(unit_a, date(2024, 1, 2)),
        _report(unit_b, date(2024, 1, 4), have_homework=True),
        _report(unit_a, date(2024, 1, 3), on_track=False),
    ]

    summary = aggregate_unit_progress(reports, today=TODAY)

    assert summary.total_units_learned == 2
    assert summary.unique_lessons_completed == 3
    first = summary.units_progress[0]
    assert first.unit_id == "a"
    assert first.times_learned == 2
    assert first.on_track is False
    assert first.on_track_ratio == 0.5
    assert first.has_homework is False
    second = summary.units_progress[1]
    assert second.unit_id == "b"
    assert second.times_learned == 1
    assert second.has_homework is True


def test_ties_keep_first_seen_order():
    unit_a, unit_b, unit_c = _unit("a", 1), _unit("b", 2), _unit("c", 3)
    reports = [
        _report(unit_c, date(2024, 1, 5)),
        _report(unit_b, date(2024, 1, 1)),
        _report(unit_a, date(2024, 1, 3)),
    ]

    summary = aggregate_unit_progress(reports, today=TODAY)

    assert [u.unit_id for u in summary.units_progress] == ["b", "a", "c"]


def test_same_day_reports_ordered_by_unit_order():
    unit_a, unit_b = _unit("a", 1), _unit("b", 2)
    reports = [_report(unit_b, date(2024, 1, 1)), _report(unit_a, date(2024, 1, 1))]

    summary = aggregate_unit_progress(reports, today=TODAY)

    assert [u.unit_id for u in summary.units_progress] == ["a", "b"]


def test_lesson_dates_and_recency():
    unit_a = _unit("a", 1)
    reports = [_report(unit_a, date(2024, 1, 10)), _report(unit_a, date(2024, 1, 20))]

    summary = aggregate_unit_progress(reports, today=TODAY)

    assert summary.first_lesson_date == date(2024, 1, 10)
    assert summary.last_lesson_date == date(2024, 1, 20)
    detail = summary.units_progress[0]
    assert detail.first_learned == date(2024, 1, 10)
    assert detail.last_learned == date(2024, 1, 20)
    assert detail.days_since_learned == 12
    assert detail.on_track_ratio == 1.0


def test_empty_reports_rejected():
    with pytest.raises(ValueError):
        aggregate_unit_progress([], today=TODAY)
