from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Optional, Union

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.constants import DEFAULT_RECURRENCE_DAYS, MAX_RECURRENCE_DATES, MONTHLY_STRIDE_DAYS
from ..core.enums import RecurrenceType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RecurrenceRule:
    """Quy tắc lặp ca: daily / weekly / monthly.

    ``days_of_week`` uses 0 = Sunday ... 6 = Saturday and is only read for weekly rules.
    ``type`` is kept as a raw string; unknown values expand to nothing.
    """

    type: str
    enabled: bool = True
    end_date: Optional[date] = None
    days_of_week: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["RecurrenceRule"]:
        if not payload:
            return None
        if not isinstance(payload, dict):
            raise ValidationError("repeat must be an object")

        end_raw = payload.get("endDate")
        end_date = parse_iso_date(end_raw) if end_raw else None

        days_raw = payload.get("daysOfWeek") or []
        if not isinstance(days_raw, (list, tuple)):
            raise ValidationError("daysOfWeek must be an array")
        days: set[int] = set()
        for d in days_raw:
            if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
                raise ValidationError("daysOfWeek entries must be integers 0-6")
            days.add(d)

        return cls(
            type=str(payload.get("type") or "").strip(),
            enabled=bool(payload.get("enabled")),
            end_date=end_date,
            days_of_week=frozenset(days),
        )


def weekday_index(d: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return d.isoweekday() % 7


def daily_step(d: date) -> date:
    return d + timedelta(days=1)


def monthly_step(d: date) -> date:
    # Fixed stride, not calendar months: 2025-01-31 -> 2025-03-02.
    return d + timedelta(days=MONTHLY_STRIDE_DAYS)


def _every_day(d: date, rule: RecurrenceRule) -> bool:
    return True


def _selected_weekdays(d: date, rule: RecurrenceRule) -> bool:
    return weekday_index(d) in rule.days_of_week


# type -> (should the cursor date be emitted, how to advance the cursor)
_PLANS: dict[str, tuple[Callable[[date, RecurrenceRule], bool], Callable[[date], date]]] = {
    RecurrenceType.DAILY.value: (_every_day, daily_step),
    RecurrenceType.WEEKLY.value: (_selected_weekdays, daily_step),
    RecurrenceType.MONTHLY.value: (_every_day, monthly_step),
}


def expand_recurrence(
    start_date: Union[date, str],
    rule: RecurrenceRule,
    *,
    limit: int = MAX_RECURRENCE_DATES,
) -> list[str]:
    """Materialize the dates a recurring shift lands on, as YYYY-MM-DD strings.

    The range runs from ``start_date`` through ``rule.end_date`` inclusive
    (``start_date + 90 days`` when no end date is given) and never yields
    more than ``limit`` dates.
    """

    start = parse_iso_date(start_date)
    end = rule.end_date or start + timedelta(days=DEFAULT_RECURRENCE_DAYS)

    plan = _PLANS.get(rule.type)
    if plan is None:
        return []
    keep, step = plan

    dates: list[str] = []
    cursor = start
    while cursor <= end and len(dates) < limit:
        if keep(cursor, rule):
            dates.append(format_iso_date(cursor))
        cursor = step(cursor)
    return dates
