"""Contract status state machine."""

from tutorlink.contracts.status import ALLOWED_TRANSITIONS, ContractStatus, can_transition, validate_transition

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ContractStatus",
    "can_transition",
    "validate_transition",
]
