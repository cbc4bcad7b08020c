from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class Leave:
    """Đơn nghỉ phép của nhân viên (khoảng ngày bao gồm cả hai đầu)."""

    leave_id: int
    employee_id: int
    start_date: date
    end_date: date
    leave_type: str
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    admin_comment: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    employee_name: Optional[str] = None

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "startDate": format_iso_date(self.start_date),
            "endDate": format_iso_date(self.end_date),
            "type": self.leave_type,
            "reason": self.reason,
            "status": self.status.value,
            "adminComment": self.admin_comment,
            "reviewedAt": self.reviewed_at.isoformat() if self.reviewed_at else None,
        }
