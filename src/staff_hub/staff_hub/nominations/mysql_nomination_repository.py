from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Nomination, NominationWinner
from .repository import NominationRepository


class MySQLNominationRepository(NominationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_month(self, month: str) -> Sequence[Nomination]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, month, nominee, nominator, reason, submitted_at
                FROM nominations
                WHERE month=%s
                ORDER BY submitted_at
                """,
                (month,),
            )
            return [
                Nomination(
                    id=str(r["id"]),
                    month=r["month"],
                    nominee=str(r["nominee"]),
                    nominator=str(r["nominator"]),
                    reason=r["reason"],
                    submitted_at=int(r["submitted_at"]),
                )
                for r in fetchall(cur)
            ]

    def add(self, nomination: Nomination) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO nominations(id, month, nominee, nominator, reason, submitted_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    nomination.id,
                    nomination.month,
                    nomination.nominee,
                    nomination.nominator,
                    nomination.reason,
                    nomination.submitted_at,
                ),
            )

    def get_winner(self, month: str) -> Optional[NominationWinner]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT month, employee_id, has_received_bonus FROM nomination_winners WHERE month=%s",
                (month,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return NominationWinner(
                month=r["month"],
                employee_id=str(r["employee_id"]),
                has_received_bonus=bool(r["has_received_bonus"]),
            )

    def add_winner(self, winner: NominationWinner) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO nomination_winners(month, employee_id, has_received_bonus) VALUES(%s,%s,%s)",
                    (winner.month, winner.employee_id, int(winner.has_received_bonus)),
                )
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise
        return True

    def mark_bonus(self, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE nomination_winners SET has_received_bonus=1 WHERE month=%s", (month,))
            return cur.rowcount > 0
