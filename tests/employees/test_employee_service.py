from __future__ import annotations

from datetime import date

import pytest

from src.scheduling_system.scheduling_system.core.exceptions import NotFoundError, ValidationError
from src.scheduling_system.scheduling_system.employees.service import EmployeeService


@pytest.fixture
def svc(employees_repo, schedules_repo):
    return EmployeeService(employees_repo, schedules_repo)


def test_create_normalizes_fields(svc):
    emp = svc.create(
        name="  Chi Le ",
        email="Chi.Le@Example.com",
        position="Cashier",
        department="Front",
        phone="  ",
    )

    assert emp.employee_id == 3
    assert emp.name == "Chi Le"
    assert emp.email == "chi.le@example.com"
    assert emp.phone is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Name is required"),
        ({"email": "not-an-email"}, "Please enter a valid email"),
        ({"position": "   "}, "Position is required"),
        ({"department": None}, "Department is required"),
        ({"email": "ALICE@example.com"}, "Employee with this email already exists"),
    ],
)
def test_create_rejects(svc, overrides, message):
    fields = dict(name="Chi Le", email="chi@example.com", position="Cashier", department="Front")
    fields.update(overrides)

    with pytest.raises(ValidationError, match=message):
        svc.create(**fields)


def test_update_partial(svc):
    emp = svc.update(1, position="Shift Lead", phone="0901 234 567")

    assert emp.position == "Shift Lead"
    assert emp.phone == "0901 234 567"
    assert emp.name == "Alice Nguyen"
    assert svc.get(1).position == "Shift Lead"


def test_update_email_taken(svc):
    with pytest.raises(ValidationError):
        svc.update(1, email="bao@example.com")


def test_update_same_email_is_fine(svc):
    assert svc.update(1, email="Alice@example.com").email == "alice@example.com"


def test_get_and_delete_unknown(svc):
    with pytest.raises(NotFoundError):
        svc.get(42)
    with pytest.raises(NotFoundError):
        svc.delete(42)


def test_list_filters(svc):
    assert [e.name for e in svc.list_all()] == ["Alice Nguyen", "Bao Tran"]
    assert [e.name for e in svc.list_all(department="Kitchen")] == ["Bao Tran"]
    assert [e.name for e in svc.list_all(search=" alice ")] == ["Alice Nguyen"]


def test_schedules_for(svc, schedules_repo):
    schedules_repo.add(2, date(2025, 1, 7), "08:00", "12:00")
    schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")

    assert [sc.employee_id for sc in svc.schedules_for(2)] == [2]
    with pytest.raises(NotFoundError):
        svc.schedules_for(9)
