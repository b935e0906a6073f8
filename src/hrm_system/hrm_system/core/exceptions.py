from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` optionally maps field names to messages so callers can show
    every problem at once instead of the first one.
    """

    def __init__(self, message: str, *, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class NotFoundError(DomainError):
    """Raised when a required record (employee, settings, request) is missing."""


class OverlappingLeaveError(ValidationError):
    """Raised when a leave request intersects an active request of the same employee."""


class DuplicateRecordError(DomainError):
    """Raised by a repository when an insert hits a unique key another writer already took."""
