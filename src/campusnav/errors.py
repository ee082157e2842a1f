"""Exception hierarchy shared by the routing and allocation engines."""

from __future__ import annotations


class CampusNavError(Exception):
    """Base class for every error raised by campusnav."""


class InvalidInputError(CampusNavError, ValueError):
    """Raised when a call violates its preconditions (missing locations, bad counts, ragged vectors)."""


class DeadlineExceededError(CampusNavError, RuntimeError):
    """Raised when a search or allocation loop exceeds its configured iteration bound."""

    def __init__(self, operation: str, limit: int) -> None:
        super().__init__(f"{operation} exceeded the iteration limit of {limit}.")
        self.operation = operation
        self.limit = limit
