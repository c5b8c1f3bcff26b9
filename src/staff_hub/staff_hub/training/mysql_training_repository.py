from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TrainingStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import TrainingRecord
from .repository import TrainingRepository

_SELECT = """
    SELECT id, employee_id, title, description, status, completion_date, expiry_date
    FROM training_records
"""


def _row_to_record(r: dict) -> TrainingRecord:
    return TrainingRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        title=r["title"],
        description=r.get("description") or "",
        status=TrainingStatus(r["status"]),
        completion_date=optional_int(r.get("completion_date")),
        expiry_date=optional_int(r.get("expiry_date")),
    )


class MySQLTrainingRepository(TrainingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TrainingRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY employee_id, title")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str) -> Sequence[TrainingRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY title", (employee_id,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[TrainingRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def add(self, record: TrainingRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO training_records(id, employee_id, title, description, status, completion_date, expiry_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.id,
                    record.employee_id,
                    record.title,
                    record.description,
                    record.status.value,
                    record.completion_date,
                    record.expiry_date,
                ),
            )

    def replace(self, record: TrainingRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE training_records
                SET title=%s, description=%s, status=%s, completion_date=%s, expiry_date=%s
                WHERE id=%s
                """,
                (
                    record.title,
                    record.description,
                    record.status.value,
                    record.completion_date,
                    record.expiry_date,
                    record.id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM training_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
