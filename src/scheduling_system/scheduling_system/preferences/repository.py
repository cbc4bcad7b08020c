from __future__ import annotations

from typing import Optional, Protocol

from .model import Preference


class PreferenceRepository(Protocol):
    def get(self, employee_id: int) -> Optional[Preference]:
        raise NotImplementedError

    def upsert(self, preference: Preference) -> None:
        raise NotImplementedError
