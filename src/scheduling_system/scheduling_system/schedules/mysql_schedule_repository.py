from __future__ import annotations

from datetime import date
from typing import ContextManager, Iterable, Optional, Sequence

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import advisory_lock, db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from .model import NewSchedule, Schedule
from .repository import ScheduleRepository

_SELECT = """
    SELECT sc.schedule_id, sc.employee_id, sc.work_date, sc.start_time, sc.end_time,
           sc.shift_type, sc.notes, e.name AS employee_name
    FROM schedules sc
    JOIN employees e ON e.employee_id = sc.employee_id
"""


def _row_to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["schedule_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        start_time=mysql_time_to_hhmm(r["start_time"]),
        end_time=mysql_time_to_hhmm(r["end_time"]),
        shift_type=r.get("shift_type") or "regular",
        notes=r.get("notes") or "",
        employee_name=r.get("employee_name"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

    def find_by_employee_and_date(
        self, *, employee_id: int, work_date: date, exclude_id: Optional[int] = None
    ) -> Sequence[Schedule]:
        sql = _SELECT + " WHERE sc.employee_id=%s AND sc.work_date=%s"
        params: list[object] = [int(employee_id), work_date]
        if exclude_id:
            sql += " AND sc.schedule_id<>%s"
            params.append(int(exclude_id))
        sql += " ORDER BY sc.schedule_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE sc.schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _row_to_schedule(r) if r else None

    def find_by_ids(self, schedule_ids: Sequence[int]) -> Sequence[Schedule]:
        ids = [int(i) for i in schedule_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE sc.schedule_id IN ({placeholders})", tuple(ids))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        department: Optional[str] = None,
    ) -> Sequence[Schedule]:
        clauses: list[str] = []
        params: list[object] = []
        if start and end:
            clauses.append("sc.work_date BETWEEN %s AND %s")
            params.extend([start, end])
        if employee_id is not None:
            clauses.append("sc.employee_id=%s")
            params.append(int(employee_id))
        if department:
            clauses.append("e.department=%s")
            params.append(department)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY sc.work_date ASC, sc.start_time ASC", tuple(params))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def create_many(self, items: Sequence[NewSchedule]) -> int:
        if not items:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO schedules(employee_id, work_date, start_time, end_time, shift_type, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [(i.employee_id, i.work_date, i.start_time, i.end_time, i.shift_type, i.notes) for i in items],
            )
            return len(items)

    @staticmethod
    def _update_params(sc: Schedule) -> tuple:
        return (sc.employee_id, sc.work_date, sc.start_time, sc.end_time, sc.shift_type, sc.notes, sc.schedule_id)

    _UPDATE = """
        UPDATE schedules
        SET employee_id=%s, work_date=%s, start_time=%s, end_time=%s, shift_type=%s, notes=%s
        WHERE schedule_id=%s
    """

    def update(self, schedule: Schedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._UPDATE, self._update_params(schedule))
            # MySQL reports 0 affected rows when nothing changed; fall back to an existence check.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS ok FROM schedules WHERE schedule_id=%s", (schedule.schedule_id,))
            return fetchone(cur) is not None

    def update_many(self, schedules: Sequence[Schedule]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            for sc in schedules:
                cur.execute(self._UPDATE, self._update_params(sc))
            return len(schedules)

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def employee_lock(self, employee_ids: Iterable[int]) -> ContextManager[None]:
        database = self._conn_factory.config.database
        names = [f"{database}.schedule.employee.{int(i)}" for i in employee_ids]
        return advisory_lock(self._conn_factory, names, timeout=self._lock_timeout)
