from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Union

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD string into date.

    Accepts a ``date`` as-is and a full ISO datetime string (time part dropped),
    because stored records and JSON payloads both flow through here.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw = (value or "").strip() if isinstance(value, str) else ""
    try:
        if _ISO_DATE.match(raw):
            return datetime.strptime(raw, "%Y-%m-%d").date()
        # Full ISO datetime, e.g. "2025-01-06T00:00:00"
        if _ISO_DATE.match(raw[:10]) and raw[10:11] in ("T", " "):
            return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour "HH:MM" string."""
    m = _HHMM.match((value or "").strip()) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)")
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    t = parse_hhmm(value)
    return t.hour * 60 + t.minute


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
