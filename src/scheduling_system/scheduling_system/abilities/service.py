from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_positive_int
from ..core.constants import ABILITY_SCORE_MAX, ABILITY_SCORE_MIN
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Ability
from .repository import AbilityRepository

logger = logging.getLogger(__name__)


def _score(value: Any, label: str) -> int:
    message = f"{label} must be an integer between {ABILITY_SCORE_MIN} and {ABILITY_SCORE_MAX}"
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not ABILITY_SCORE_MIN <= value <= ABILITY_SCORE_MAX:
        raise ValidationError(message)
    return value


class AbilityService:
    """Use case: read and rate an employee's abilities; rank follows the total score."""

    def __init__(self, abilities: AbilityRepository, employees: EmployeeRepository):
        self._abilities = abilities
        self._employees = employees

    def _employee(self, employee_id: Any) -> Employee:
        employee = self._employees.get_by_id(require_positive_int(employee_id, "Employee ID"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get(self, employee_id: int) -> tuple[Employee, Ability]:
        """Stored scores, or the default (all 3, rank C) when the employee was never rated."""

        employee = self._employee(employee_id)
        ability = self._abilities.get(employee.employee_id)
        return employee, ability or Ability(employee_id=employee.employee_id, employee_name=employee.name)

    def update(
        self,
        employee_id: int,
        *,
        experience: Any,
        work_skill: Any,
        team_chemistry: Any,
        customer_service: Any,
        flexibility: Any,
    ) -> Ability:
        employee = self._employee(employee_id)
        ability = Ability(
            employee_id=employee.employee_id,
            experience=_score(experience, "Experience"),
            work_skill=_score(work_skill, "Work skill"),
            team_chemistry=_score(team_chemistry, "Team chemistry"),
            customer_service=_score(customer_service, "Customer service"),
            flexibility=_score(flexibility, "Flexibility"),
            employee_name=employee.name,
        )
        self._abilities.upsert(ability)
        logger.info("Ability for employee=%s: total=%d rank=%s", employee.employee_id, ability.total_score, ability.rank.value)
        return ability
