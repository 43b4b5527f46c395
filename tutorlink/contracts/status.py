"""Contract status state machine.

    pending -> active -> completed
    pending -> cancelled
    active  -> cancelled

completed and cancelled are terminal. Literals are case-sensitive.
"""

from __future__ import annotations

from enum import Enum

from tutorlink.core.errors import InvalidArgumentError


class ContractStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, literal: str | ContractStatus | None) -> ContractStatus:
        """Convert a raw status literal, rejecting anything unknown.

        Raises:
            InvalidArgumentError: "Invalid status." for None or unknown literals
        """
        if isinstance(literal, ContractStatus):
            return literal
        try:
            return cls(literal)
        except ValueError:
            raise InvalidArgumentError("Invalid status.") from None

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[ContractStatus, frozenset[ContractStatus]] = {
    ContractStatus.PENDING: frozenset({ContractStatus.ACTIVE, ContractStatus.CANCELLED}),
    ContractStatus.ACTIVE: frozenset({ContractStatus.COMPLETED, ContractStatus.CANCELLED}),
    ContractStatus.COMPLETED: frozenset(),
    ContractStatus.CANCELLED: frozenset(),
}


def can_transition(current: ContractStatus, new: ContractStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def validate_transition(current: ContractStatus, new: ContractStatus) -> None:
    """Raise unless current -> new is a legal edge.

    Raises:
        InvalidArgumentError: If the transition is not allowed
    """
    if not can_transition(current, new):
        raise InvalidArgumentError(f"Invalid status transition from '{current.value}' to '{new.value}'.")
