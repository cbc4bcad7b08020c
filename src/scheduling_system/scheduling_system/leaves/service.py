from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_non_empty, require_positive_int
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use case: leave requests and their approval flow."""

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._clock = clock

    def _ensure_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

    def _ensure_no_overlap(self, *, employee_id: int, start: date, end: date, exclude_id: Optional[int] = None) -> None:
        if start > end:
            raise ValidationError("Start date cannot be after end date")
        if self._leaves.find_overlapping(employee_id=employee_id, start=start, end=end, exclude_id=exclude_id):
            raise ValidationError("Employee has an overlapping leave request for this period")

    def get(self, leave_id: int) -> Leave:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def list_all(self) -> Sequence[Leave]:
        return self._leaves.list_leaves()

    def list_pending(self) -> Sequence[Leave]:
        return self._leaves.list_leaves(status=LeaveStatus.PENDING)

    def list_for_employee(self, employee_id: int) -> Sequence[Leave]:
        return self._leaves.list_leaves(employee_id=require_positive_int(employee_id, "Employee ID"))

    def create(
        self,
        *,
        employee_id: Any,
        start_date: Union[date, str],
        end_date: Union[date, str],
        leave_type: str,
        reason: str,
    ) -> Leave:
        employee_id = require_positive_int(employee_id, "Employee ID")
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        leave_type = require_non_empty(leave_type, "Leave type")
        reason = require_non_empty(reason, "Reason")

        self._ensure_employee(employee_id)
        self._ensure_no_overlap(employee_id=employee_id, start=start, end=end)

        leave_id = self._leaves.create(
            employee_id=employee_id, start_date=start, end_date=end, leave_type=leave_type, reason=reason
        )
        logger.info("Leave %s requested for employee=%s (%s..%s)", leave_id, employee_id, start, end)
        return self.get(leave_id)

    def update(self, leave_id: int, **fields: Any) -> Leave:
        current = self.get(leave_id)
        changes: dict[str, Any] = {}

        if fields.get("employee_id") is not None:
            changes["employee_id"] = require_positive_int(fields["employee_id"], "Employee ID")
            self._ensure_employee(changes["employee_id"])
        if fields.get("start_date"):
            changes["start_date"] = parse_iso_date(fields["start_date"])
        if fields.get("end_date"):
            changes["end_date"] = parse_iso_date(fields["end_date"])
        if fields.get("leave_type") is not None:
            changes["leave_type"] = require_non_empty(fields["leave_type"], "Leave type")
        if fields.get("reason") is not None:
            changes["reason"] = require_non_empty(fields["reason"], "Reason")
        if fields.get("status") is not None:
            try:
                changes["status"] = LeaveStatus(str(fields["status"]).lower())
            except ValueError:
                raise ValidationError("Status must be pending, approved, or rejected")

        updated = replace(current, **changes)
        if {"employee_id", "start_date", "end_date"} & changes.keys():
            self._ensure_no_overlap(
                employee_id=updated.employee_id,
                start=updated.start_date,
                end=updated.end_date,
                exclude_id=updated.leave_id,
            )

        if not self._leaves.update(updated):
            raise NotFoundError("Leave request not found")
        return self.get(leave_id)

    def _decide(self, leave_id: int, status: LeaveStatus, comment: Optional[str], default_comment: str) -> Leave:
        leave = self.get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        ok = self._leaves.decide(
            leave_id=leave.leave_id,
            status=status,
            admin_comment=(comment or "").strip() or default_comment,
            reviewed_at=self._clock(),
        )
        if not ok:
            raise NotFoundError("Leave request not found")
        logger.info("Leave %s %s", leave.leave_id, status.value)
        return self.get(leave_id)

    def approve(self, leave_id: int, *, comment: Optional[str] = None) -> Leave:
        return self._decide(leave_id, LeaveStatus.APPROVED, comment, "Approved")

    def reject(self, leave_id: int, *, comment: Optional[str] = None) -> Leave:
        return self._decide(leave_id, LeaveStatus.REJECTED, comment, "Rejected")

    def delete(self, leave_id: int) -> None:
        if not self._leaves.delete(int(leave_id)):
            raise NotFoundError("Leave request not found")
