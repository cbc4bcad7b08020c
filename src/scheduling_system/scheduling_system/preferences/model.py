from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.constants import DEFAULT_PREFERRED_END, DEFAULT_PREFERRED_START


@dataclass(frozen=True)
class Preference:
    """Nguyện vọng xếp ca của nhân viên.

    Days are lowercase English weekday names ("monday" ... "sunday").
    """

    employee_id: int
    prefer_days: Tuple[str, ...] = ()
    avoid_days: Tuple[str, ...] = ()
    fixed_off_days: Tuple[str, ...] = ()
    preferred_start_time: str = DEFAULT_PREFERRED_START
    preferred_end_time: str = DEFAULT_PREFERRED_END

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "preferDays": list(self.prefer_days),
            "avoidDays": list(self.avoid_days),
            "fixedOffDays": list(self.fixed_off_days),
            "preferredStartTime": self.preferred_start_time,
            "preferredEndTime": self.preferred_end_time,
        }
