from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Tuple

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..common.validators import require_positive_int
from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Preference
from .repository import PreferenceRepository


def _weekdays(value: Any, label: str) -> Tuple[str, ...]:
    """Normalize a list of weekday names; result is deduplicated and in week order."""

    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{label} must be an array")
    days = set()
    for item in value:
        name = item.strip().lower() if isinstance(item, str) else None
        if name not in WEEKDAY_NAMES:
            raise ValidationError(f"{label} contains an invalid day: {item!r}")
        days.add(name)
    return tuple(d for d in WEEKDAY_NAMES if d in days)


class PreferenceService:
    def __init__(self, preferences: PreferenceRepository, employees: EmployeeRepository):
        self._preferences = preferences
        self._employees = employees

    def _ensure_employee(self, employee_id: Any) -> int:
        employee_id = require_positive_int(employee_id, "Employee ID")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        return employee_id

    def get(self, employee_id: int) -> Preference:
        employee_id = self._ensure_employee(employee_id)
        return self._preferences.get(employee_id) or Preference(employee_id=employee_id)

    def update(
        self,
        employee_id: int,
        *,
        prefer_days: Any = None,
        avoid_days: Any = None,
        fixed_off_days: Any = None,
        preferred_start_time: Optional[str] = None,
        preferred_end_time: Optional[str] = None,
    ) -> Preference:
        """Replace the day lists (missing lists become empty); times keep their value when omitted."""

        current = self.get(employee_id)
        updated = replace(
            current,
            prefer_days=_weekdays(prefer_days, "preferDays"),
            avoid_days=_weekdays(avoid_days, "avoidDays"),
            fixed_off_days=_weekdays(fixed_off_days, "fixedOffDays"),
            preferred_start_time=(
                format_hhmm(parse_hhmm(preferred_start_time)) if preferred_start_time else current.preferred_start_time
            ),
            preferred_end_time=(
                format_hhmm(parse_hhmm(preferred_end_time)) if preferred_end_time else current.preferred_end_time
            ),
        )
        self._preferences.upsert(updated)
        return updated
