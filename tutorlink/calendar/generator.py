"""Session calendar generation for contracts.

Deterministic walk over a contract's date range:
- Dates are visited in order from start_date to end_date inclusive
- A date produces a session only if its weekday bit is set in the mask
- Generation stops once target_count sessions exist
- A range that runs out early yields fewer sessions (logged, never raised)

Nothing here touches the database. Callers persist the returned objects.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, time, timedelta

from loguru import logger
from pydantic import BaseModel

from tutorlink.calendar.weekdays import WeekdayMask
from tutorlink.db.models import TutoringSession

SCHEDULED = "scheduled"


class SessionSlot(BaseModel):
    """One generated slot, used for read-only schedule previews."""

    session_date: date
    start_time: datetime
    end_time: datetime
    is_online: bool


def iter_session_dates(
    start_date: date,
    end_date: date,
    days_of_week: int | WeekdayMask,
    target_count: int,
) -> Iterator[date]:
    """Yield matching dates in order, at most target_count of them.

    Args:
        start_date: First calendar date (inclusive)
        end_date: Last calendar date (inclusive)
        days_of_week: Weekday bitmask or WeekdayMask
        target_count: Maximum number of dates to yield

    Yields:
        Dates whose weekday is set in the mask
    """
    mask = days_of_week if isinstance(days_of_week, WeekdayMask) else WeekdayMask(days_of_week)
    if target_count <= 0 or mask.is_empty or end_date < start_date:
        return

    produced = 0
    current = start_date
    while current <= end_date and produced < target_count:
        if mask.contains_date(current):
            yield current
            produced += 1
        current += timedelta(days=1)


def preview_schedule(
    start_date: date,
    end_date: date,
    days_of_week: int | WeekdayMask,
    start_time: time,
    end_time: time,
    is_online: bool,
    target_count: int,
) -> list[SessionSlot]:
    """Build the slots a contract would get, without creating sessions."""
    return [
        SessionSlot(
            session_date=d,
            start_time=datetime.combine(d, start_time),
            end_time=datetime.combine(d, end_time),
            is_online=is_online,
        )
        for d in iter_session_dates(start_date, end_date, days_of_week, target_count)
    ]


def generate_sessions(
    contract_id: str,
    start_date: date,
    end_date: date,
    days_of_week: int | WeekdayMask,
    start_time: time,
    end_time: time,
    is_online: bool,
    target_count: int,
    tutor_id: str | None = None,
    skip_dates: frozenset[date] | set[date] = frozenset(),
) -> list[TutoringSession]:
    """Generate the ordered session batch for a contract.

    Args:
        contract_id: Owning contract ID
        start_date: Contract start date (inclusive)
        end_date: Contract end date (inclusive)
        days_of_week: Weekday bitmask (bit 0 = Sunday ... bit 6 = Saturday)
        start_time: Time of day each session starts
        end_time: Time of day each session ends
        is_online: Online flag copied onto every session
        target_count: Package session count
        tutor_id: Optional tutor copied onto every session
        skip_dates: Dates already taken; they are passed over and do not
            count towards target_count

    Returns:
        Transient TutoringSession objects in date order. Empty when
        target_count <= 0, the mask is empty or the range is inverted.
    """
    sessions = [
        TutoringSession(
            contract_id=contract_id,
            tutor_id=tutor_id,
            session_date=d,
            start_time=datetime.combine(d, start_time),
            end_time=datetime.combine(d, end_time),
            is_online=is_online,
            status=SCHEDULED,
        )
        for d in iter_session_dates(start_date, end_date, days_of_week, target_count + len(skip_dates))
        if d not in skip_dates
    ][: max(target_count, 0)]

    if len(sessions) < target_count:
        logger.bind(contract_id=contract_id).warning(
            f"Date range {start_date}..{end_date} only fits {len(sessions)} of {target_count} sessions"
        )
    logger.debug(f"Generated {len(sessions)} sessions for contract {contract_id}")
    return sessions
