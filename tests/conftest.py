from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

import pytest

from src.scheduling_system.scheduling_system.abilities.model import Ability
from src.scheduling_system.scheduling_system.container import build_services
from src.scheduling_system.scheduling_system.core.enums import LeaveStatus
from src.scheduling_system.scheduling_system.employees.model import Employee
from src.scheduling_system.scheduling_system.leaves.model import Leave
from src.scheduling_system.scheduling_system.main import create_app
from src.scheduling_system.scheduling_system.preferences.model import Preference
from src.scheduling_system.scheduling_system.schedules.model import NewSchedule, Schedule


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._id = max(self._by_id, default=0)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def list_all(self, *, department=None, search=None):
        items = sorted(self._by_id.values(), key=lambda e: e.name)
        if department:
            items = [e for e in items if e.department == department]
        if search:
            items = [e for e in items if search.lower() in e.name.lower()]
        return items

    def create(self, *, name, email, position, department, phone=None, address=None) -> int:
        self._id += 1
        self._by_id[self._id] = Employee(self._id, name, email, position, department, phone, address)
        return self._id

    def update(self, employee: Employee) -> bool:
        if employee.employee_id not in self._by_id:
            return False
        self._by_id[employee.employee_id] = employee
        return True

    def delete(self, employee_id: int) -> bool:
        return self._by_id.pop(int(employee_id), None) is not None


class InMemorySchedules:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, Schedule] = {}
        self._id = 0
        self.find_calls = 0
        self.locked: list[set[int]] = []
        # Called on lock entry; lets a test land a concurrent write just before the check.
        self.on_lock = None

    def _named(self, sc: Schedule) -> Schedule:
        emp = self._employees.get_by_id(sc.employee_id)
        return replace(sc, employee_name=emp.name if emp else None)

    def add(self, employee_id: int, work_date: date, start_time: str, end_time: str, shift_type: str = "regular") -> int:
        self.create_many([NewSchedule(employee_id, work_date, start_time, end_time, shift_type)])
        return self._id

    def find_by_employee_and_date(self, *, employee_id, work_date, exclude_id=None):
        self.find_calls += 1
        return [
            self._named(sc)
            for sc in self._rows.values()
            if sc.employee_id == employee_id and sc.work_date == work_date and sc.schedule_id != exclude_id
        ]

    def get_by_id(self, schedule_id):
        sc = self._rows.get(int(schedule_id))
        return self._named(sc) if sc else None

    def find_by_ids(self, schedule_ids):
        return [self._named(self._rows[i]) for i in schedule_ids if i in self._rows]

    def list_range(self, *, start=None, end=None, employee_id=None, department=None):
        items = [self._named(sc) for sc in self._rows.values()]
        if start and end:
            items = [sc for sc in items if start <= sc.work_date <= end]
        if employee_id is not None:
            items = [sc for sc in items if sc.employee_id == employee_id]
        if department:
            items = [sc for sc in items if self._employees.get_by_id(sc.employee_id).department == department]
        return sorted(items, key=lambda sc: (sc.work_date, sc.start_time))

    def create_many(self, items):
        for item in items:
            self._id += 1
            self._rows[self._id] = Schedule(
                schedule_id=self._id,
                employee_id=item.employee_id,
                work_date=item.work_date,
                start_time=item.start_time,
                end_time=item.end_time,
                shift_type=item.shift_type,
                notes=item.notes,
            )
        return len(items)

    def update(self, schedule):
        if schedule.schedule_id not in self._rows:
            return False
        self._rows[schedule.schedule_id] = replace(schedule, employee_name=None)
        return True

    def update_many(self, schedules):
        for sc in schedules:
            self.update(sc)
        return len(schedules)

    def delete(self, schedule_id):
        return self._rows.pop(int(schedule_id), None) is not None

    @contextmanager
    def employee_lock(self, employee_ids):
        self.locked.append(set(employee_ids))
        if self.on_lock:
            self.on_lock()
        yield

    def all(self) -> list[Schedule]:
        return list(self._rows.values())


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, Leave] = {}
        self._id = 0

    def _named(self, lv: Leave) -> Leave:
        emp = self._employees.get_by_id(lv.employee_id)
        return replace(lv, employee_name=emp.name if emp else None)

    def get_by_id(self, leave_id):
        lv = self._rows.get(int(leave_id))
        return self._named(lv) if lv else None

    def list_leaves(self, *, status=None, employee_id=None):
        items = [self._named(lv) for lv in self._rows.values()]
        if status is not None:
            items = [lv for lv in items if lv.status == status]
        if employee_id is not None:
            items = [lv for lv in items if lv.employee_id == employee_id]
        return sorted(items, key=lambda lv: lv.leave_id, reverse=True)

    def find_overlapping(self, *, employee_id, start, end, exclude_id=None):
        return [
            lv
            for lv in self._rows.values()
            if lv.employee_id == employee_id
            and lv.status != LeaveStatus.REJECTED
            and lv.leave_id != exclude_id
            and lv.overlaps(start, end)
        ]

    def create(self, *, employee_id, start_date, end_date, leave_type, reason):
        self._id += 1
        self._rows[self._id] = Leave(self._id, employee_id, start_date, end_date, leave_type, reason)
        return self._id

    def update(self, leave):
        if leave.leave_id not in self._rows:
            return False
        self._rows[leave.leave_id] = leave
        return True

    def decide(self, *, leave_id, status, admin_comment, reviewed_at):
        lv = self._rows.get(int(leave_id))
        if not lv:
            return False
        self._rows[lv.leave_id] = replace(lv, status=status, admin_comment=admin_comment, reviewed_at=reviewed_at)
        return True

    def delete(self, leave_id):
        return self._rows.pop(int(leave_id), None) is not None


class InMemoryAbilities:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, Ability] = {}

    def get(self, employee_id) -> Optional[Ability]:
        ability = self._rows.get(int(employee_id))
        if not ability:
            return None
        emp = self._employees.get_by_id(ability.employee_id)
        return replace(ability, employee_name=emp.name if emp else None)

    def upsert(self, ability: Ability) -> None:
        self._rows[ability.employee_id] = replace(ability, employee_name=None)


class InMemoryPreferences:
    def __init__(self):
        self._rows: dict[int, Preference] = {}

    def get(self, employee_id) -> Optional[Preference]:
        return self._rows.get(int(employee_id))

    def upsert(self, preference: Preference) -> None:
        self._rows[preference.employee_id] = preference


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 1, 8, 30, 0)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees(
        [
            Employee(1, "Alice Nguyen", "alice@example.com", "Barista", "Front"),
            Employee(2, "Bao Tran", "bao@example.com", "Cook", "Kitchen"),
        ]
    )


@pytest.fixture
def schedules_repo(employees_repo):
    return InMemorySchedules(employees_repo)


@pytest.fixture
def leaves_repo(employees_repo):
    return InMemoryLeaves(employees_repo)


@pytest.fixture
def abilities_repo(employees_repo):
    return InMemoryAbilities(employees_repo)


@pytest.fixture
def preferences_repo():
    return InMemoryPreferences()


@pytest.fixture
def container(employees_repo, schedules_repo, leaves_repo, abilities_repo, preferences_repo):
    return build_services(
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        leaves_repo=leaves_repo,
        abilities_repo=abilities_repo,
        preferences_repo=preferences_repo,
    )


@pytest.fixture
def client(container):
    app = create_app(container=container, settings_module="config.testing")
    return app.test_client()
