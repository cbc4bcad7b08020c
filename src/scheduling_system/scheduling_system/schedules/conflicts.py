"""Schedule conflict detection.

Two shifts of the same employee on the same date conflict when their
half-open ``[start, end)`` intervals intersect. A shift whose end time is
earlier than its start time runs past midnight; its end is pushed forward
by one day before comparing, and the part past midnight is also compared
against the other shift's early-morning hours of that date.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from ..common.datetime_utils import parse_iso_date, to_minutes
from ..common.validators import require_positive_int
from ..core.constants import CONFLICT_REASON_OVERLAP, MINUTES_PER_DAY
from .model import ScheduleConflict
from .repository import ScheduleLookup

logger = logging.getLogger(__name__)


def to_interval(start_time: str, end_time: str) -> tuple[int, int]:
    start = to_minutes(start_time)
    end = to_minutes(end_time)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def is_time_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    s1, e1 = to_interval(start1, end1)
    s2, e2 = to_interval(start2, end2)
    return any(s1 < e2 + shift and e1 > s2 + shift for shift in (0, MINUTES_PER_DAY, -MINUTES_PER_DAY))


class ConflictDetector:
    def __init__(self, schedules: ScheduleLookup):
        self._schedules = schedules

    def detect(
        self,
        *,
        employee_id: int,
        work_date: Union[date, str],
        start_time: str,
        end_time: str,
        exclude_id: Optional[int] = None,
    ) -> list[ScheduleConflict]:
        employee_id = require_positive_int(employee_id, "Employee ID")
        day = parse_iso_date(work_date)
        # Fail on malformed candidate times before touching storage.
        to_interval(start_time, end_time)

        existing = self._schedules.find_by_employee_and_date(
            employee_id=employee_id,
            work_date=day,
            exclude_id=int(exclude_id) if exclude_id else None,
        )

        conflicts: list[ScheduleConflict] = []
        for sc in existing:
            if is_time_overlap(start_time, end_time, sc.start_time, sc.end_time):
                conflicts.append(
                    ScheduleConflict(
                        schedule_id=sc.schedule_id,
                        employee_name=sc.employee_name,
                        work_date=sc.work_date,
                        start_time=sc.start_time,
                        end_time=sc.end_time,
                        reason=CONFLICT_REASON_OVERLAP,
                    )
                )

        if conflicts:
            logger.debug(
                "employee=%s date=%s %s-%s overlaps %d shift(s)",
                employee_id, day, start_time, end_time, len(conflicts),
            )
        return conflicts
