"""Calendar module - weekday masks and session calendar generation.

This module provides:
- WeekdayMask over the 7-bit contract bitmask (bit 0 = Sunday)
- Deterministic session generation for a contract's date range
- Read-only schedule previews
"""

from tutorlink.calendar.generator import SessionSlot, generate_sessions, iter_session_dates, preview_schedule
from tutorlink.calendar.weekdays import Weekday, WeekdayMask

__all__ = [
    "SessionSlot",
    "Weekday",
    "WeekdayMask",
    "generate_sessions",
    "iter_session_dates",
    "preview_schedule",
]
