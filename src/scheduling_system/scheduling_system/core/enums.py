from __future__ import annotations

from enum import Enum


class RecurrenceType(str, Enum):
    """Kiểu lặp lại của ca làm việc."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class LeaveStatus(str, Enum):
    """Trạng thái duyệt đơn nghỉ phép."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AbilityRank(str, Enum):
    """Hạng năng lực tính từ tổng điểm (S cao nhất)."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
