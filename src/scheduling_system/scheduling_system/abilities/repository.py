from __future__ import annotations

from typing import Optional, Protocol

from .model import Ability


class AbilityRepository(Protocol):
    """One ability row per employee."""

    def get(self, employee_id: int) -> Optional[Ability]:
        raise NotImplementedError

    def upsert(self, ability: Ability) -> None:
        raise NotImplementedError
