from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AppraisalType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AppraisalRecord
from .repository import AppraisalRepository

_SELECT = """
    SELECT id, employee_id, scheduled_date, appraisal_type, notes, is_complete
    FROM appraisals
"""


def _row_to_record(r: dict) -> AppraisalRecord:
    return AppraisalRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        scheduled_date=int(r["scheduled_date"]),
        appraisal_type=AppraisalType(r["appraisal_type"]),
        notes=r.get("notes") or "",
        is_complete=bool(r.get("is_complete")),
    )


class MySQLAppraisalRepository(AppraisalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AppraisalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY scheduled_date DESC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str) -> Sequence[AppraisalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY scheduled_date DESC", (employee_id,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[AppraisalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def add(self, record: AppraisalRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO appraisals(id, employee_id, scheduled_date, appraisal_type, notes, is_complete)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.id,
                    record.employee_id,
                    record.scheduled_date,
                    record.appraisal_type.value,
                    record.notes,
                    int(record.is_complete),
                ),
            )

    def replace(self, record: AppraisalRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE appraisals
                SET employee_id=%s, scheduled_date=%s, appraisal_type=%s, notes=%s, is_complete=%s
                WHERE id=%s
                """,
                (
                    record.employee_id,
                    record.scheduled_date,
                    record.appraisal_type.value,
                    record.notes,
                    int(record.is_complete),
                    record.id,
                ),
            )
            return cur.rowcount > 0
