from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..core.exceptions import LockTimeoutError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def advisory_lock(conn_factory: DatabaseConnection, names: Iterable[str], *, timeout: int) -> Iterator[None]:
    """Hold MySQL named locks (GET_LOCK) for the duration of the block.

    Names are acquired in sorted order so two requests touching the same set
    of employees cannot deadlock each other.
    """

    ordered = sorted(set(names))
    conn = conn_factory.connect()
    acquired: list[str] = []
    try:
        cur = conn.cursor()
        try:
            for name in ordered:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, int(timeout)))
                row = cur.fetchone()
                if not row or row[0] != 1:
                    raise LockTimeoutError("Schedule is being modified by another request, please retry")
                acquired.append(name)

            yield
        finally:
            for name in reversed(acquired):
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
            cur.close()
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def mysql_time_to_hhmm(value: Any) -> str:
    t = normalize_mysql_time(value)
    return t.strftime("%H:%M") if t else ""
