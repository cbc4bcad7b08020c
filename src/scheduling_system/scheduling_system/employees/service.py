from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.validators import require_email, require_non_empty, require_positive_int
from ..core.exceptions import NotFoundError, ValidationError
from ..schedules.model import Schedule
from ..schedules.repository import ScheduleRepository
from .model import Employee
from .repository import EmployeeRepository


def _clean_optional(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


class EmployeeService:
    """Use case: manage employees."""

    def __init__(self, employees: EmployeeRepository, schedules: Optional[ScheduleRepository] = None):
        self._employees = employees
        self._schedules = schedules

    def list_all(self, *, department: Optional[str] = None, search: Optional[str] = None) -> Sequence[Employee]:
        return self._employees.list_all(department=department or None, search=(search or "").strip() or None)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(require_positive_int(employee_id, "Employee ID"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(
        self,
        *,
        name: str,
        email: str,
        position: str,
        department: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        position = require_non_empty(position, "Position")
        department = require_non_empty(department, "Department")

        if self._employees.get_by_email(email):
            raise ValidationError("Employee with this email already exists")

        employee_id = self._employees.create(
            name=name,
            email=email,
            position=position,
            department=department,
            phone=_clean_optional(phone),
            address=_clean_optional(address),
        )
        return self.get(employee_id)

    def update(self, employee_id: int, **fields: Any) -> Employee:
        """Partial update; only keys present (and not None) are changed."""

        current = self.get(employee_id)
        changes: dict[str, Any] = {}

        if fields.get("name") is not None:
            changes["name"] = require_non_empty(fields["name"], "Name")
        if fields.get("position") is not None:
            changes["position"] = require_non_empty(fields["position"], "Position")
        if fields.get("department") is not None:
            changes["department"] = require_non_empty(fields["department"], "Department")
        if fields.get("email") is not None:
            email = require_email(fields["email"])
            if email != current.email:
                other = self._employees.get_by_email(email)
                if other and other.employee_id != current.employee_id:
                    raise ValidationError("Employee with this email already exists")
            changes["email"] = email
        for key in ("phone", "address"):
            if key in fields:
                changes[key] = _clean_optional(fields[key])

        updated = replace(current, **changes)
        if not self._employees.update(updated):
            raise NotFoundError("Employee not found")
        return updated

    def delete(self, employee_id: int) -> None:
        if not self._employees.delete(require_positive_int(employee_id, "Employee ID")):
            raise NotFoundError("Employee not found")

    def schedules_for(self, employee_id: int) -> Sequence[Schedule]:
        employee = self.get(employee_id)
        if not self._schedules:
            return []
        return self._schedules.list_range(employee_id=employee.employee_id)
