"""Day-of-week bitmask used by contracts.

Contracts store their weekly recurrence as a 7-bit integer. The bit layout is
the one persisted by the platform since launch:

    bit 0 = Sunday, bit 1 = Monday, ... bit 6 = Saturday

so 62 (0b0111110) means Monday to Friday. Weekday values themselves follow
date.weekday() (Monday = 0); only the bit position is rotated.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from enum import IntEnum

from tutorlink.core.errors import InvalidArgumentError

MAX_MASK = 0b1111111


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def bit(self) -> int:
        """Bit flag of this weekday inside a WeekdayMask."""
        return 1 << ((self.value + 1) % 7)

    @classmethod
    def of(cls, d: date) -> Weekday:
        return cls(d.weekday())


WEEKDAY_ABBREVIATIONS: dict[str, dict[Weekday, str]] = {
    "vi": {
        Weekday.MONDAY: "T2",
        Weekday.TUESDAY: "T3",
        Weekday.WEDNESDAY: "T4",
        Weekday.THURSDAY: "T5",
        Weekday.FRIDAY: "T6",
        Weekday.SATURDAY: "T7",
        Weekday.SUNDAY: "CN",
    },
    "en": {
        Weekday.MONDAY: "Mon",
        Weekday.TUESDAY: "Tue",
        Weekday.WEDNESDAY: "Wed",
        Weekday.THURSDAY: "Thu",
        Weekday.FRIDAY: "Fri",
        Weekday.SATURDAY: "Sat",
        Weekday.SUNDAY: "Sun",
    },
}


class WeekdayMask:
    """Immutable wrapper around the contract weekday bitmask."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Day-of-week mask must be an integer, got {value!r}.") from e
        if not 0 <= number <= MAX_MASK:
            raise InvalidArgumentError(f"Day-of-week mask must be between 0 and {MAX_MASK}, got {value}.")
        self._value = number

    @classmethod
    def from_weekdays(cls, weekdays: Iterable[Weekday]) -> WeekdayMask:
        value = 0
        for weekday in weekdays:
            value |= Weekday(weekday).bit
        return cls(value)

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_empty(self) -> bool:
        return self._value == 0

    def contains(self, weekday: Weekday) -> bool:
        return bool(self._value & Weekday(weekday).bit)

    def contains_date(self, d: date) -> bool:
        return self.contains(Weekday.of(d))

    def weekdays(self) -> frozenset[Weekday]:
        """Set of weekdays whose bit is set."""
        return frozenset(day for day in Weekday if self.contains(day))

    def display(self, locale: str = "vi") -> str:
        """Render set days as comma-separated abbreviations, Monday first.

        Args:
            locale: "vi" (T2 ... CN) or "en" (Mon ... Sun)

        Returns:
            e.g. "T2, T3, T4, T5, T6" for 62, "" for an empty mask
        """
        names = WEEKDAY_ABBREVIATIONS.get(locale)
        if names is None:
            raise InvalidArgumentError(f"Unsupported weekday locale '{locale}'.")
        return ", ".join(names[day] for day in sorted(self.weekdays()))

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WeekdayMask):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"WeekdayMask({self._value:#09b})"
