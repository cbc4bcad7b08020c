from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.employee_id, l.start_date, l.end_date, l.leave_type, l.reason,
           l.status, l.admin_comment, l.reviewed_at, e.name AS employee_name
    FROM leaves l
    JOIN employees e ON e.employee_id = l.employee_id
"""


def _row_to_leave(r: dict) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=r["leave_type"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        admin_comment=r.get("admin_comment"),
        reviewed_at=r.get("reviewed_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_leaves(self, *, status: Optional[LeaveStatus] = None, employee_id: Optional[int] = None) -> Sequence[Leave]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("l.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("l.employee_id=%s")
            params.append(int(employee_id))

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY l.created_at DESC, l.leave_id DESC", tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def find_overlapping(
        self, *, employee_id: int, start: date, end: date, exclude_id: Optional[int] = None
    ) -> Sequence[Leave]:
        sql = _SELECT + " WHERE l.employee_id=%s AND l.status<>%s AND l.start_date<=%s AND l.end_date>=%s"
        params: list[object] = [int(employee_id), LeaveStatus.REJECTED.value, end, start]
        if exclude_id:
            sql += " AND l.leave_id<>%s"
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def create(
        self, *, employee_id: int, start_date: date, end_date: date, leave_type: str, reason: str
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(employee_id, start_date, end_date, leave_type, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, leave_type, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def update(self, leave: Leave) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET employee_id=%s, start_date=%s, end_date=%s, leave_type=%s, reason=%s, status=%s
                WHERE leave_id=%s
                """,
                (
                    leave.employee_id,
                    leave.start_date,
                    leave.end_date,
                    leave.leave_type,
                    leave.reason,
                    leave.status.value,
                    leave.leave_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence is checked by the service.
            return True

    def decide(
        self, *, leave_id: int, status: LeaveStatus, admin_comment: Optional[str], reviewed_at: datetime
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, admin_comment=%s, reviewed_at=%s
                WHERE leave_id=%s
                """,
                (status.value, admin_comment, reviewed_at, int(leave_id)),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leaves WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
