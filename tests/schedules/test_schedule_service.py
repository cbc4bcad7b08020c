from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.scheduling_system.scheduling_system.core.exceptions import (
    BulkConflictError,
    NotFoundError,
    ScheduleConflictError,
    ValidationError,
)
from src.scheduling_system.scheduling_system.schedules.model import ScheduleUpdate
from src.scheduling_system.scheduling_system.schedules.recurrence import RecurrenceRule
from src.scheduling_system.scheduling_system.schedules.service import ScheduleService


@pytest.fixture
def svc(schedules_repo, employees_repo):
    return ScheduleService(schedules_repo, employees_repo)


def test_single_create(svc, schedules_repo):
    count = svc.create(employee_id=1, work_date="2025-01-06", start_time="9:00", end_time="17:00")

    assert count == 1
    (sc,) = schedules_repo.all()
    assert sc.start_time == "09:00"
    assert sc.shift_type == "regular"
    assert sc.notes == ""
    assert schedules_repo.locked == [{1}]


def test_single_create_conflict_creates_nothing(svc, schedules_repo):
    existing = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")

    with pytest.raises(ScheduleConflictError) as exc:
        svc.create(employee_id=1, work_date="2025-01-06", start_time="11:00", end_time="15:00")

    assert [c.schedule_id for c in exc.value.conflicts] == [existing]
    assert len(schedules_repo.all()) == 1


def test_single_create_touching_shift_is_allowed(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    assert svc.create(employee_id=1, work_date="2025-01-06", start_time="12:00", end_time="16:00") == 1


def test_recurring_create_drops_colliding_dates(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 2), "10:00", "11:00")
    schedules_repo.add(1, date(2025, 1, 4), "08:00", "09:30")
    schedules_repo.add(2, date(2025, 1, 3), "09:00", "17:00")

    rule = RecurrenceRule(type="daily", end_date=date(2025, 1, 5))
    count = svc.create(
        employee_id=1, work_date="2025-01-01", start_time="09:00", end_time="17:00", shift_type="early", repeat=rule
    )

    assert count == 3
    created = [sc for sc in schedules_repo.all() if sc.shift_type == "early"]
    assert [sc.work_date.isoformat() for sc in created] == ["2025-01-01", "2025-01-03", "2025-01-05"]


def test_recurring_create_when_every_date_collides(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 1), "00:00", "23:59")
    rule = RecurrenceRule(type="daily", end_date=date(2025, 1, 1))

    assert svc.create(employee_id=1, work_date="2025-01-01", start_time="09:00", end_time="10:00", repeat=rule) == 0


def test_disabled_repeat_is_single_create(svc, schedules_repo):
    rule = RecurrenceRule(type="daily", enabled=False, end_date=date(2025, 1, 10))
    assert svc.create(employee_id=1, work_date="2025-01-01", start_time="09:00", end_time="10:00", repeat=rule) == 1


def test_create_unknown_employee(svc):
    with pytest.raises(NotFoundError):
        svc.create(employee_id=99, work_date="2025-01-01", start_time="09:00", end_time="10:00")


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(employee_id="abc", work_date="2025-01-01", start_time="09:00", end_time="10:00"),
        dict(employee_id=1, work_date="not-a-date", start_time="09:00", end_time="10:00"),
        dict(employee_id=1, work_date="2025-01-01", start_time=None, end_time="10:00"),
        dict(employee_id=1, work_date="2025-01-01", start_time="09:00", end_time="25:00"),
    ],
)
def test_create_invalid_input(svc, kwargs):
    with pytest.raises(ValidationError):
        svc.create(**kwargs)


def test_update_falls_back_to_current_values(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "09:00", "17:00")

    updated = svc.update(ScheduleUpdate(schedule_id=sid, end_time="18:00"))

    assert updated.start_time == "09:00"
    assert updated.end_time == "18:00"
    assert updated.work_date == date(2025, 1, 6)
    assert updated.employee_name == "Alice Nguyen"


def test_update_conflict(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 6), "13:00", "17:00")
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")

    with pytest.raises(ScheduleConflictError):
        svc.update(ScheduleUpdate(schedule_id=sid, end_time="14:00"))
    assert schedules_repo.get_by_id(sid).end_time == "12:00"


def test_update_moves_to_other_employee(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")

    updated = svc.update(ScheduleUpdate(schedule_id=sid, employee_id=2))

    assert updated.employee_id == 2
    assert updated.employee_name == "Bao Tran"
    assert schedules_repo.locked[-1] == {1, 2}


def test_update_unknown_schedule(svc):
    with pytest.raises(NotFoundError):
        svc.update(ScheduleUpdate(schedule_id=42, start_time="10:00"))


def test_bulk_update_applies_all(svc, schedules_repo):
    a = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    b = schedules_repo.add(2, date(2025, 1, 6), "08:00", "12:00")

    updated = svc.bulk_update(
        [
            ScheduleUpdate(schedule_id=a, work_date=date(2025, 1, 7)),
            ScheduleUpdate(schedule_id=b, start_time="13:00", end_time="17:00"),
        ]
    )

    assert [sc.schedule_id for sc in updated] == [a, b]
    assert schedules_repo.get_by_id(a).work_date == date(2025, 1, 7)
    assert schedules_repo.get_by_id(b).start_time == "13:00"


def test_bulk_update_rejects_whole_batch_on_one_conflict(svc, schedules_repo):
    blocker = schedules_repo.add(2, date(2025, 1, 8), "09:00", "17:00")
    a = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    b = schedules_repo.add(1, date(2025, 1, 7), "08:00", "12:00")
    c = schedules_repo.add(2, date(2025, 1, 6), "08:00", "12:00")

    with pytest.raises(BulkConflictError) as exc:
        svc.bulk_update(
            [
                ScheduleUpdate(schedule_id=a, start_time="13:00", end_time="15:00"),
                ScheduleUpdate(schedule_id=b, employee_id=2, work_date=date(2025, 1, 8)),
                ScheduleUpdate(schedule_id=c, notes="moved"),
            ]
        )

    assert len(exc.value.items) == 1
    offending_id, conflicts = exc.value.items[0]
    assert offending_id == b
    assert [x.schedule_id for x in conflicts] == [blocker]

    # Nothing applied
    assert schedules_repo.get_by_id(a).start_time == "08:00"
    assert schedules_repo.get_by_id(b).employee_id == 1
    assert schedules_repo.get_by_id(c).notes == ""


def test_bulk_update_validation(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")

    with pytest.raises(ValidationError):
        svc.bulk_update([])
    with pytest.raises(ValidationError):
        svc.bulk_update([ScheduleUpdate(schedule_id=sid), ScheduleUpdate(schedule_id=sid)])
    with pytest.raises(NotFoundError):
        svc.bulk_update([ScheduleUpdate(schedule_id=sid), ScheduleUpdate(schedule_id=999)])


def test_list_range_requires_ordered_bounds(svc):
    with pytest.raises(ValidationError):
        svc.list_range(start=date(2025, 2, 1), end=date(2025, 1, 1))


def test_delete(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    svc.delete(sid)
    with pytest.raises(NotFoundError):
        svc.delete(sid)


def _write_once_on_lock(repo, schedule_id, **fields):
    def write():
        repo.on_lock = None
        repo.update(replace(repo.get_by_id(schedule_id), **fields))

    repo.on_lock = write


def test_update_checks_record_as_stored_under_lock(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 6), "13:00", "17:00")
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "11:00")
    _write_once_on_lock(schedules_repo, sid, end_time="14:00")

    # 10:00-11:00 would fit, but the stored end is 14:00 by the time the lock is held.
    with pytest.raises(ScheduleConflictError):
        svc.update(ScheduleUpdate(schedule_id=sid, start_time="10:00"))
    assert schedules_repo.get_by_id(sid).start_time == "08:00"


def test_update_keeps_fields_written_before_lock(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    _write_once_on_lock(schedules_repo, sid, notes="bring keys")

    updated = svc.update(ScheduleUpdate(schedule_id=sid, end_time="12:30"))

    assert updated.end_time == "12:30"
    assert updated.notes == "bring keys"


def test_update_relocks_when_record_moved_to_other_employee(svc, schedules_repo):
    sid = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    _write_once_on_lock(schedules_repo, sid, employee_id=2)

    updated = svc.update(ScheduleUpdate(schedule_id=sid, start_time="09:00"))

    assert schedules_repo.locked == [{1}, {2}]
    assert updated.employee_id == 2
    assert updated.start_time == "09:00"


def test_bulk_update_checks_records_as_stored_under_lock(svc, schedules_repo):
    schedules_repo.add(1, date(2025, 1, 6), "13:00", "17:00")
    a = schedules_repo.add(1, date(2025, 1, 6), "08:00", "11:00")
    b = schedules_repo.add(2, date(2025, 1, 6), "08:00", "12:00")
    _write_once_on_lock(schedules_repo, a, end_time="14:00")

    with pytest.raises(BulkConflictError) as exc:
        svc.bulk_update(
            [
                ScheduleUpdate(schedule_id=a, start_time="10:00"),
                ScheduleUpdate(schedule_id=b, notes="swap"),
            ]
        )

    assert [schedule_id for schedule_id, _ in exc.value.items] == [a]
    assert schedules_repo.get_by_id(b).notes == ""


def test_bulk_update_relocks_when_record_moved(svc, schedules_repo):
    a = schedules_repo.add(1, date(2025, 1, 6), "08:00", "12:00")
    _write_once_on_lock(schedules_repo, a, employee_id=2)

    (updated,) = svc.bulk_update([ScheduleUpdate(schedule_id=a, notes="moved")])

    assert schedules_repo.locked == [{1}, {2}]
    assert updated.employee_id == 2
    assert updated.notes == "moved"
