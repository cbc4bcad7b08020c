from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ABILITY_RANK_THRESHOLDS, DEFAULT_ABILITY_SCORE
from ..core.enums import AbilityRank


def calculate_rank(total_score: int) -> AbilityRank:
    for minimum, rank in ABILITY_RANK_THRESHOLDS:
        if total_score >= minimum:
            return AbilityRank(rank)
    return AbilityRank.D


@dataclass(frozen=True)
class Ability:
    """Điểm năng lực của một nhân viên, mỗi tiêu chí từ 1 đến 5."""

    employee_id: int
    experience: int = DEFAULT_ABILITY_SCORE
    work_skill: int = DEFAULT_ABILITY_SCORE
    team_chemistry: int = DEFAULT_ABILITY_SCORE
    customer_service: int = DEFAULT_ABILITY_SCORE
    flexibility: int = DEFAULT_ABILITY_SCORE
    employee_name: Optional[str] = None

    @property
    def total_score(self) -> int:
        return self.experience + self.work_skill + self.team_chemistry + self.customer_service + self.flexibility

    @property
    def rank(self) -> AbilityRank:
        return calculate_rank(self.total_score)

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "experience": self.experience,
            "workSkill": self.work_skill,
            "teamChemistry": self.team_chemistry,
            "customerService": self.customer_service,
            "flexibility": self.flexibility,
            "totalScore": self.total_score,
            "rank": self.rank.value,
        }
