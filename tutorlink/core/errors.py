"""Domain error types for the service layer.

Three conditions reach callers:
- NotFoundError: a referenced resource (contract, child, report history,
  curriculum with active units...) does not exist
- InvalidArgumentError: unknown status literal, illegal transition, bad
  generation parameters. Raised before any repository write.
- UnauthorizedError: the acting user does not own the resource

These are business logic errors, not database errors. get_session() re-raises
them without logging a database failure.
"""


class TutorlinkError(Exception):
    """Base class for all domain errors.

    Attributes:
        message: Human readable message, also used as the HTTP detail
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(TutorlinkError, LookupError):
    """Raised when a referenced resource is missing."""


class InvalidArgumentError(TutorlinkError, ValueError):
    """Raised when input fails validation or a state change is illegal."""


class UnauthorizedError(TutorlinkError, PermissionError):
    """Raised when the acting user may not touch the resource."""

    def __init__(self, message: str = "You are not allowed to modify this resource."):
        super().__init__(message)
