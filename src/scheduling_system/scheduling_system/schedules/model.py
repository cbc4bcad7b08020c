from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date


@dataclass(frozen=True)
class Schedule:
    """Thực thể miền (domain): một ca làm việc của nhân viên trong một ngày.

    ``start_time``/``end_time`` are "HH:MM" strings; ``end_time < start_time``
    means the shift runs past midnight.
    """

    schedule_id: int
    employee_id: int
    work_date: date
    start_time: str
    end_time: str
    shift_type: str = "regular"
    notes: str = ""
    employee_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "date": format_iso_date(self.work_date),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "shiftType": self.shift_type,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class NewSchedule:
    employee_id: int
    work_date: date
    start_time: str
    end_time: str
    shift_type: str
    notes: str = ""


@dataclass(frozen=True)
class ScheduleUpdate:
    """Partial update as received from the client; ``None`` means "keep current"."""

    schedule_id: int
    employee_id: Optional[int] = None
    work_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    shift_type: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ScheduleConflict:
    """One existing shift that collides with a candidate shift."""

    schedule_id: int
    employee_name: Optional[str]
    work_date: date
    start_time: str
    end_time: str
    reason: str

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "employee": self.employee_name,
            "date": format_iso_date(self.work_date),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "reason": self.reason,
        }
