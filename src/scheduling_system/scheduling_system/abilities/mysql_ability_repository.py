from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Ability
from .repository import AbilityRepository


def _row_to_ability(r: dict) -> Ability:
    return Ability(
        employee_id=int(r["employee_id"]),
        experience=int(r["experience"]),
        work_skill=int(r["work_skill"]),
        team_chemistry=int(r["team_chemistry"]),
        customer_service=int(r["customer_service"]),
        flexibility=int(r["flexibility"]),
        employee_name=r.get("employee_name"),
    )


class MySQLAbilityRepository(AbilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[Ability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.employee_id, a.experience, a.work_skill, a.team_chemistry,
                       a.customer_service, a.flexibility, e.name AS employee_name
                FROM abilities a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE a.employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_ability(r) if r else None

    def upsert(self, ability: Ability) -> None:
        # total_score/rank are stored for reporting queries; the model derives them.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO abilities(employee_id, experience, work_skill, team_chemistry,
                                      customer_service, flexibility, total_score, `rank`)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    experience=VALUES(experience),
                    work_skill=VALUES(work_skill),
                    team_chemistry=VALUES(team_chemistry),
                    customer_service=VALUES(customer_service),
                    flexibility=VALUES(flexibility),
                    total_score=VALUES(total_score),
                    `rank`=VALUES(`rank`)
                """,
                (
                    ability.employee_id,
                    ability.experience,
                    ability.work_skill,
                    ability.team_chemistry,
                    ability.customer_service,
                    ability.flexibility,
                    ability.total_score,
                    ability.rank.value,
                ),
            )
