from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import format_hhmm, parse_hhmm, parse_iso_date
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_SHIFT_TYPE
from ..core.exceptions import BulkConflictError, NotFoundError, ScheduleConflictError, ValidationError
from ..employees.repository import EmployeeRepository
from .conflicts import ConflictDetector
from .model import NewSchedule, Schedule, ScheduleConflict, ScheduleUpdate
from .recurrence import RecurrenceRule, expand_recurrence
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use cases: create / update / bulk update shifts with conflict checks.

    Single creates and bulk updates are all-or-nothing. Recurring creates are
    best-effort: dates that collide are dropped and the rest are created.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        employees: Optional[EmployeeRepository] = None,
        *,
        detector: Optional[ConflictDetector] = None,
    ):
        self._schedules = schedules
        self._employees = employees
        self._detector = detector or ConflictDetector(schedules)

    def _ensure_employee(self, employee_id: int) -> None:
        if self._employees and not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

    @staticmethod
    def _require_time(value: Optional[str], field_name: str) -> str:
        if value is None or not str(value).strip():
            raise ValidationError(f"{field_name} is required")
        return format_hhmm(parse_hhmm(str(value)))

    def get(self, schedule_id: int) -> Schedule:
        sc = self._schedules.get_by_id(int(schedule_id))
        if not sc:
            raise NotFoundError("Schedule not found")
        return sc

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        department: Optional[str] = None,
    ) -> Sequence[Schedule]:
        if start and end and end < start:
            raise ValidationError("endDate must be on or after startDate")
        # A half-open range filter is ignored, like the list screen expects.
        if not (start and end):
            start = end = None
        return self._schedules.list_range(start=start, end=end, employee_id=employee_id, department=department)

    def list_for_employee(self, employee_id: int) -> Sequence[Schedule]:
        return self._schedules.list_range(employee_id=require_positive_int(employee_id, "Employee ID"))

    def check_conflicts(
        self,
        *,
        employee_id: int,
        work_date: Union[date, str],
        start_time: str,
        end_time: str,
        exclude_id: Optional[int] = None,
    ) -> list[ScheduleConflict]:
        return self._detector.detect(
            employee_id=employee_id,
            work_date=work_date,
            start_time=self._require_time(start_time, "Start time"),
            end_time=self._require_time(end_time, "End time"),
            exclude_id=exclude_id,
        )

    def preview_dates(self, *, start_date: Union[date, str], rule: RecurrenceRule) -> list[str]:
        return expand_recurrence(start_date, rule)

    def create(
        self,
        *,
        employee_id: int,
        work_date: Union[date, str],
        start_time: str,
        end_time: str,
        shift_type: Optional[str] = None,
        notes: Optional[str] = None,
        repeat: Optional[RecurrenceRule] = None,
    ) -> int:
        """Create one shift, or one shift per recurrence date. Returns the created count."""

        employee_id = require_positive_int(employee_id, "Employee ID")
        day = parse_iso_date(work_date)
        start_time = self._require_time(start_time, "Start time")
        end_time = self._require_time(end_time, "End time")
        shift_type = (shift_type or "").strip() or DEFAULT_SHIFT_TYPE
        notes = (notes or "").strip()

        self._ensure_employee(employee_id)

        with self._schedules.employee_lock([employee_id]):
            if repeat and repeat.enabled:
                dates = expand_recurrence(day, repeat)
                batch: list[NewSchedule] = []
                for d in dates:
                    if self._detector.detect(employee_id=employee_id, work_date=d, start_time=start_time, end_time=end_time):
                        logger.info("Skipping %s for employee=%s: time overlap", d, employee_id)
                        continue
                    batch.append(
                        NewSchedule(
                            employee_id=employee_id,
                            work_date=parse_iso_date(d),
                            start_time=start_time,
                            end_time=end_time,
                            shift_type=shift_type,
                            notes=notes,
                        )
                    )
                created = self._schedules.create_many(batch) if batch else 0
                logger.info(
                    "Recurring %s create for employee=%s: %d/%d date(s) created",
                    repeat.type, employee_id, created, len(dates),
                )
                return created

            conflicts = self._detector.detect(
                employee_id=employee_id, work_date=day, start_time=start_time, end_time=end_time
            )
            if conflicts:
                logger.info("Rejected shift for employee=%s on %s: %d conflict(s)", employee_id, day, len(conflicts))
                raise ScheduleConflictError(conflicts)

            return self._schedules.create_many(
                [
                    NewSchedule(
                        employee_id=employee_id,
                        work_date=day,
                        start_time=start_time,
                        end_time=end_time,
                        shift_type=shift_type,
                        notes=notes,
                    )
                ]
            )

    def _apply(self, current: Schedule, change: ScheduleUpdate) -> Schedule:
        """Merge a partial update onto the stored record; missing fields keep their current value."""

        employee_id = current.employee_id
        if change.employee_id is not None:
            employee_id = require_positive_int(change.employee_id, "Employee ID")

        work_date = parse_iso_date(change.work_date) if change.work_date else current.work_date
        start_time = self._require_time(change.start_time, "Start time") if change.start_time else current.start_time
        end_time = self._require_time(change.end_time, "End time") if change.end_time else current.end_time

        return replace(
            current,
            employee_id=employee_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            shift_type=change.shift_type.strip() if change.shift_type else current.shift_type,
            notes=change.notes if change.notes is not None else current.notes,
            employee_name=current.employee_name if employee_id == current.employee_id else None,
        )

    def _load_many(self, ids: Sequence[int]) -> dict[int, Schedule]:
        found = {sc.schedule_id: sc for sc in self._schedules.find_by_ids(ids)}
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(f"Schedule not found: {', '.join(str(i) for i in missing)}")
        return found

    def update(self, change: ScheduleUpdate) -> Schedule:
        current = self.get(change.schedule_id)
        while True:
            target = self._apply(current, change)
            if target.employee_id != current.employee_id:
                self._ensure_employee(target.employee_id)

            locked = {current.employee_id, target.employee_id}
            with self._schedules.employee_lock(locked):
                # Fallback fields come from the record as it is under the lock.
                fresh = self.get(change.schedule_id)
                if fresh.employee_id in locked:
                    target = self._apply(fresh, change)
                    conflicts = self._detector.detect(
                        employee_id=target.employee_id,
                        work_date=target.work_date,
                        start_time=target.start_time,
                        end_time=target.end_time,
                        exclude_id=target.schedule_id,
                    )
                    if conflicts:
                        raise ScheduleConflictError(conflicts)

                    if not self._schedules.update(target):
                        raise NotFoundError("Schedule not found")
                    break
            # Moved to another employee meanwhile; lock that one too and retry.
            current = fresh

        return self.get(target.schedule_id)

    def bulk_update(self, changes: Sequence[ScheduleUpdate]) -> list[Schedule]:
        if not changes:
            raise ValidationError("No updates provided")

        ids = [int(c.schedule_id) for c in changes]
        if len(set(ids)) != len(ids):
            raise ValidationError("Each schedule may appear only once per bulk update")

        current_by_id = self._load_many(ids)
        while True:
            targets = [self._apply(current_by_id[c.schedule_id], c) for c in changes]
            for t in targets:
                if t.employee_id != current_by_id[t.schedule_id].employee_id:
                    self._ensure_employee(t.employee_id)

            lock_ids = {t.employee_id for t in targets} | {sc.employee_id for sc in current_by_id.values()}
            with self._schedules.employee_lock(lock_ids):
                fresh_by_id = self._load_many(ids)
                if all(sc.employee_id in lock_ids for sc in fresh_by_id.values()):
                    targets = [self._apply(fresh_by_id[c.schedule_id], c) for c in changes]
                    offending: list[tuple[int, list[ScheduleConflict]]] = []
                    for t in targets:
                        conflicts = self._detector.detect(
                            employee_id=t.employee_id,
                            work_date=t.work_date,
                            start_time=t.start_time,
                            end_time=t.end_time,
                            exclude_id=t.schedule_id,
                        )
                        if conflicts:
                            offending.append((t.schedule_id, conflicts))

                    if offending:
                        logger.info("Bulk update rejected: %d of %d item(s) conflict", len(offending), len(targets))
                        raise BulkConflictError(offending)

                    self._schedules.update_many(targets)
                    break
            current_by_id = fresh_by_id

        logger.info("Bulk updated %d schedule(s)", len(targets))
        updated = {sc.schedule_id: sc for sc in self._schedules.find_by_ids(ids)}
        return [updated[i] for i in ids if i in updated]

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(int(schedule_id)):
            raise NotFoundError("Schedule not found")
