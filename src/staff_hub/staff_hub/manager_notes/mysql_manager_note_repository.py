from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ManagerNoteType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ManagerNote
from .repository import ManagerNoteRepository

_SELECT = """
    SELECT id, employee_id, author_employee_id, note_type, content, created_at
    FROM manager_notes
"""


def _row_to_note(r: dict) -> ManagerNote:
    return ManagerNote(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        author_employee_id=str(r["author_employee_id"]),
        note_type=ManagerNoteType(r["note_type"]),
        content=r.get("content") or "",
        created_at=int(r["created_at"]),
    )


class MySQLManagerNoteRepository(ManagerNoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[ManagerNote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY created_at DESC", (employee_id,))
            return [_row_to_note(r) for r in fetchall(cur)]

    def get_by_id(self, note_id: str) -> Optional[ManagerNote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (note_id,))
            r = fetchone(cur)
            return _row_to_note(r) if r else None

    def add(self, note: ManagerNote) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO manager_notes(id, employee_id, author_employee_id, note_type, content, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    note.id,
                    note.employee_id,
                    note.author_employee_id,
                    note.note_type.value,
                    note.content,
                    note.created_at,
                ),
            )

    def replace(self, note: ManagerNote) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE manager_notes SET note_type=%s, content=%s WHERE id=%s",
                (note.note_type.value, note.content, note.id),
            )
            return cur.rowcount > 0

    def delete(self, note_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM manager_notes WHERE id=%s", (note_id,))
            return cur.rowcount > 0
