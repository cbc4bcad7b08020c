from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import Leave


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_leaves(self, *, status: Optional[LeaveStatus] = None, employee_id: Optional[int] = None) -> Sequence[Leave]:
        raise NotImplementedError

    def find_overlapping(
        self, *, employee_id: int, start: date, end: date, exclude_id: Optional[int] = None
    ) -> Sequence[Leave]:
        """Non-rejected leaves of the employee intersecting [start, end]."""

        raise NotImplementedError

    def create(
        self, *, employee_id: int, start_date: date, end_date: date, leave_type: str, reason: str
    ) -> int:
        raise NotImplementedError

    def update(self, leave: Leave) -> bool:
        raise NotImplementedError

    def decide(
        self, *, leave_id: int, status: LeaveStatus, admin_comment: Optional[str], reviewed_at: datetime
    ) -> bool:
        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
