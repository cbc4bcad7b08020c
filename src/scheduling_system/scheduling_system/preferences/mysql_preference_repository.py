from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, mysql_time_to_hhmm
from .model import Preference
from .repository import PreferenceRepository


def _days(value: Any) -> Tuple[str, ...]:
    # JSON columns come back as str (pure connector) or bytes depending on the driver build.
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return tuple(value or ())


def _row_to_preference(r: dict) -> Preference:
    return Preference(
        employee_id=int(r["employee_id"]),
        prefer_days=_days(r.get("prefer_days")),
        avoid_days=_days(r.get("avoid_days")),
        fixed_off_days=_days(r.get("fixed_off_days")),
        preferred_start_time=mysql_time_to_hhmm(r["preferred_start_time"]),
        preferred_end_time=mysql_time_to_hhmm(r["preferred_end_time"]),
    )


class MySQLPreferenceRepository(PreferenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[Preference]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, prefer_days, avoid_days, fixed_off_days,
                       preferred_start_time, preferred_end_time
                FROM preferences WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_preference(r) if r else None

    def upsert(self, preference: Preference) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO preferences(employee_id, prefer_days, avoid_days, fixed_off_days,
                                        preferred_start_time, preferred_end_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    prefer_days=VALUES(prefer_days),
                    avoid_days=VALUES(avoid_days),
                    fixed_off_days=VALUES(fixed_off_days),
                    preferred_start_time=VALUES(preferred_start_time),
                    preferred_end_time=VALUES(preferred_end_time)
                """,
                (
                    preference.employee_id,
                    json.dumps(list(preference.prefer_days)),
                    json.dumps(list(preference.avoid_days)),
                    json.dumps(list(preference.fixed_off_days)),
                    preference.preferred_start_time,
                    preference.preferred_end_time,
                ),
            )
