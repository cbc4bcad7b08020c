from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên được xếp ca."""

    employee_id: int
    name: str
    email: str
    position: str
    department: str
    phone: Optional[str] = None
    address: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "position": self.position,
            "department": self.department,
            "phone": self.phone,
            "address": self.address,
        }
