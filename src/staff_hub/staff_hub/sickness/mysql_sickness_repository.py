from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SicknessRecord
from .repository import SicknessRepository

_SELECT = """
    SELECT id, employee_id, absence_start_date, absence_end_date, reason, return_note
    FROM sickness_records
"""


def _row_to_record(r: dict) -> SicknessRecord:
    return SicknessRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        absence_start_date=int(r["absence_start_date"]),
        absence_end_date=int(r["absence_end_date"]),
        reason=r.get("reason") or "",
        return_note=r.get("return_note") or "",
    )


class MySQLSicknessRepository(SicknessRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[SicknessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY absence_start_date DESC", (employee_id,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[SicknessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def add(self, record: SicknessRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sickness_records(id, employee_id, absence_start_date, absence_end_date, reason, return_note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.id,
                    record.employee_id,
                    record.absence_start_date,
                    record.absence_end_date,
                    record.reason,
                    record.return_note,
                ),
            )

    def replace(self, record: SicknessRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sickness_records
                SET absence_start_date=%s, absence_end_date=%s, reason=%s, return_note=%s
                WHERE id=%s
                """,
                (
                    record.absence_start_date,
                    record.absence_end_date,
                    record.reason,
                    record.return_note,
                    record.id,
                ),
            )
            return cur.rowcount > 0
