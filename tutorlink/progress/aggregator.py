"""Unit progress aggregation over daily reports.

Reports are grouped by unit. Per unit:
- times_learned: number of reports
- has_homework: any report flagged homework
- on_track: every report on track
- on_track_ratio: share of on-track reports

Units with more reports come first; ties keep first-seen order (earliest
report date, then unit order).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from tutorlink.db.models import DailyReport
from tutorlink.schemas.progress import UnitProgressDetail


@dataclass
class _UnitGroup:
    unit_id: str
    first_seen: int
    reports: list[DailyReport] = field(default_factory=list)


@dataclass
class UnitProgressSummary:
    """Aggregated progress before child metadata is attached."""

    total_units_learned: int
    unique_lessons_completed: int
    units_progress: list[UnitProgressDetail]
    first_lesson_date: date
    last_lesson_date: date


def _chronological(reports: Sequence[DailyReport]) -> list[DailyReport]:
    return sorted(reports, key=lambda r: (r.created_date, r.unit.unit_order if r.unit is not None else 0))


def _detail(group: _UnitGroup, today: date) -> UnitProgressDetail:
    reports = group.reports
    unit = reports[0].unit
    on_track_count = sum(1 for r in reports if r.on_track)
    first_learned = min(r.created_date for r in reports)
    last_learned = max(r.created_date for r in reports)
    return UnitProgressDetail(
        unit_id=group.unit_id,
        unit_name=unit.unit_name if unit is not None else None,
        unit_order=unit.unit_order if unit is not None else None,
        times_learned=len(reports),
        has_homework=any(r.have_homework for r in reports),
        on_track=on_track_count == len(reports),
        on_track_ratio=round(on_track_count / len(reports), 2),
        first_learned=first_learned,
        last_learned=last_learned,
        days_since_learned=(today - last_learned).days,
    )


def aggregate_unit_progress(reports: Sequence[DailyReport], today: date | None = None) -> UnitProgressSummary:
    """Group a child's reports by unit and summarize each group.

    Args:
        reports: All daily reports of one child, any order
        today: Reference date for days_since_learned (defaults to date.today())

    Returns:
        UnitProgressSummary with per-unit details ordered most-reports-first

    Raises:
        ValueError: If reports is empty
    """
    if not reports:
        raise ValueError("Cannot aggregate progress without reports")

    today = today or date.today()
    ordered = _chronological(reports)

    groups: dict[str, _UnitGroup] = {}
    for report in ordered:
        group = groups.get(report.unit_id)
        if group is None:
            group = groups[report.unit_id] = _UnitGroup(unit_id=report.unit_id, first_seen=len(groups))
        group.reports.append(report)

    ranked = sorted(groups.values(), key=lambda g: (-len(g.reports), g.first_seen))

    return UnitProgressSummary(
        total_units_learned=len(groups),
        unique_lessons_completed=len(ordered),
        units_progress=[_detail(group, today) for group in ranked],
        first_lesson_date=ordered[0].created_date,
        last_lesson_date=ordered[-1].created_date,
    )
