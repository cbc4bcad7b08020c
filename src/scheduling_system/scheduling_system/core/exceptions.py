from __future__ import annotations

from typing import Any, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class LockTimeoutError(DomainError):
    """Raised when a per-employee schedule lock cannot be acquired in time."""


class ScheduleConflictError(DomainError):
    """A candidate shift overlaps existing shifts of the same employee."""

    def __init__(self, conflicts: Sequence[Any], message: str = "Schedule conflicts detected"):
        super().__init__(message)
        self.conflicts = list(conflicts)


class BulkConflictError(DomainError):
    """One or more items of a bulk update collide; nothing was applied.

    ``items`` holds ``(schedule_id, conflicts)`` pairs for offending updates only.
    """

    def __init__(self, items: Sequence[tuple[int, Sequence[Any]]], message: str = "Conflicts detected in bulk update"):
        super().__init__(message)
        self.items = [(int(schedule_id), list(conflicts)) for schedule_id, conflicts in items]
