from __future__ import annotations

from dataclasses import dataclass

from .abilities.mysql_ability_repository import MySQLAbilityRepository
from .abilities.repository import AbilityRepository
from .abilities.service import AbilityService
from .core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .preferences.mysql_preference_repository import MySQLPreferenceRepository
from .preferences.repository import PreferenceRepository
from .preferences.service import PreferenceService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    schedules_repo: ScheduleRepository
    leaves_repo: LeaveRepository
    abilities_repo: AbilityRepository
    preferences_repo: PreferenceRepository

    employee_service: EmployeeService
    schedule_service: ScheduleService
    leave_service: LeaveService
    ability_service: AbilityService
    preference_service: PreferenceService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    schedules_repo: ScheduleRepository,
    leaves_repo: LeaveRepository,
    abilities_repo: AbilityRepository,
    preferences_repo: PreferenceRepository,
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""

    return Container(
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        leaves_repo=leaves_repo,
        abilities_repo=abilities_repo,
        preferences_repo=preferences_repo,
        employee_service=EmployeeService(employees_repo, schedules_repo),
        schedule_service=ScheduleService(schedules_repo, employees_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        ability_service=AbilityService(abilities_repo, employees_repo),
        preference_service=PreferenceService(preferences_repo, employees_repo),
    )


def build_container(*, db_config: dict, lock_timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn, lock_timeout=lock_timeout),
        leaves_repo=MySQLLeaveRepository(conn),
        abilities_repo=MySQLAbilityRepository(conn),
        preferences_repo=MySQLPreferenceRepository(conn),
    )
