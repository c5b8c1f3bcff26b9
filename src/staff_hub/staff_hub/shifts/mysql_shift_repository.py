from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.enums import ShiftCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Shift, ShiftNote, split_category_prefix
from .repository import ShiftRepository


def _row_to_shift(r: dict, assigned: Sequence[str]) -> Shift:
    category = ShiftCategory(r.get("category") or ShiftCategory.WORKED.value)
    department = r.get("department") or ""
    if category == ShiftCategory.WORKED:
        # Rows written before the category column existed still carry the prefix.
        category, department = split_category_prefix(department)

    return Shift(
        id=str(r["id"]),
        date=int(r["date"]),
        start_time=int(r["start_time"]),
        end_time=int(r["end_time"]),
        department=department,
        assigned_employees=tuple(assigned),
        category=category,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str = "", params: tuple = ()) -> list[Shift]:
        cur.execute(
            f"""
            SELECT s.id, s.date, s.start_time, s.end_time, s.department, s.category
            FROM shifts s
            {where}
            ORDER BY s.date, s.start_time
            """,
            params,
        )
        rows = fetchall(cur)
        if not rows:
            return []

        cur.execute(
            """
            SELECT shift_id, employee_id
            FROM shift_assignments
            ORDER BY shift_id, position
            """
        )
        assigned: dict[str, list[str]] = defaultdict(list)
        for a in fetchall(cur):
            assigned[str(a["shift_id"])].append(str(a["employee_id"]))

        return [_row_to_shift(r, assigned.get(str(r["id"]), [])) for r in rows]

    def _write_assignments(self, cur, shift: Shift) -> None:
        cur.execute("DELETE FROM shift_assignments WHERE shift_id=%s", (shift.id,))
        for position, employee_id in enumerate(shift.assigned_employees):
            cur.execute(
                "INSERT INTO shift_assignments(shift_id, employee_id, position) VALUES(%s,%s,%s)",
                (shift.id, employee_id, position),
            )

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur)

    def list_for_employee(self, employee_id: str) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(
                cur,
                "WHERE s.id IN (SELECT shift_id FROM shift_assignments WHERE employee_id=%s)",
                (employee_id,),
            )

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            found = self._load(cur, "WHERE s.id=%s", (shift_id,))
            return found[0] if found else None

    def add(self, shift: Shift) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(id, date, start_time, end_time, department, category)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (shift.id, shift.date, shift.start_time, shift.end_time, shift.department, shift.category.value),
            )
            self._write_assignments(cur, shift)

    def replace(self, shift: Shift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET date=%s, start_time=%s, end_time=%s, department=%s, category=%s
                WHERE id=%s
                """,
                (shift.date, shift.start_time, shift.end_time, shift.department, shift.category.value, shift.id),
            )
            if cur.rowcount <= 0:
                return False
            self._write_assignments(cur, shift)
            return True

    def delete(self, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_assignments WHERE shift_id=%s", (shift_id,))
            cur.execute("DELETE FROM shift_notes WHERE shift_id=%s", (shift_id,))
            cur.execute("DELETE FROM shifts WHERE id=%s", (shift_id,))
            return cur.rowcount > 0

    def add_note(self, note: ShiftNote) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_notes(id, shift_id, note_text, employee_id, created_timestamp)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (note.id, note.shift_id, note.note_text, note.employee_id, note.created_timestamp),
            )

    def list_notes(self, shift_id: str) -> Sequence[ShiftNote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, shift_id, note_text, employee_id, created_timestamp
                FROM shift_notes
                WHERE shift_id=%s
                ORDER BY created_timestamp
                """,
                (shift_id,),
            )
            return [
                ShiftNote(
                    id=str(r["id"]),
                    shift_id=str(r["shift_id"]),
                    note_text=r["note_text"],
                    created_timestamp=int(r["created_timestamp"]),
                    employee_id=r.get("employee_id"),
                )
                for r in fetchall(cur)
            ]
