from __future__ import annotations

from datetime import date
from typing import ContextManager, Iterable, Optional, Protocol, Sequence

from .model import NewSchedule, Schedule


class ScheduleLookup(Protocol):
    """Read capability the conflict detector depends on."""

    def find_by_employee_and_date(
        self, *, employee_id: int, work_date: date, exclude_id: Optional[int] = None
    ) -> Sequence[Schedule]:
        raise NotImplementedError


class ScheduleRepository(ScheduleLookup, Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def find_by_ids(self, schedule_ids: Sequence[int]) -> Sequence[Schedule]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        department: Optional[str] = None,
    ) -> Sequence[Schedule]:
        raise NotImplementedError

    def create_many(self, items: Sequence[NewSchedule]) -> int:
        """Insert all items in one transaction. Returns the number created."""

        raise NotImplementedError

    def update(self, schedule: Schedule) -> bool:
        raise NotImplementedError

    def update_many(self, schedules: Sequence[Schedule]) -> int:
        """Write all rows in one transaction (all-or-nothing)."""

        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError

    def employee_lock(self, employee_ids: Iterable[int]) -> ContextManager[None]:
        """Serialize check-then-write sequences per employee."""

        raise NotImplementedError
