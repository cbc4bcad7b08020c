from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, position, department, phone, address"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        position=r["position"],
        department=r["department"],
        phone=r.get("phone"),
        address=r.get("address"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_all(self, *, department: Optional[str] = None, search: Optional[str] = None) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[object] = []
        if department:
            clauses.append("department=%s")
            params.append(department)
        if search:
            clauses.append("name LIKE %s")
            params.append(f"%{search}%")

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees{where} ORDER BY name", tuple(params))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        email: str,
        position: str,
        department: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, position, department, phone, address)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, email, position, department, phone, address),
            )
            return int(cur.lastrowid)

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, email=%s, position=%s, department=%s, phone=%s, address=%s
                WHERE employee_id=%s
                """,
                (
                    employee.name,
                    employee.email,
                    employee.position,
                    employee.department,
                    employee.phone,
                    employee.address,
                    employee.employee_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence is checked by the service.
            return True

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
