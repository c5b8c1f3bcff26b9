from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Badge, StaffBadge
from .repository import BadgeRepository

_SELECT_BADGE = "SELECT id, name, description, category FROM badges"

_SELECT_ASSIGNMENT = """
    SELECT id, employee_id, badge_id, assigned_by, assigned_at, note
    FROM staff_badges
"""


def _row_to_badge(r: dict) -> Badge:
    return Badge(
        id=str(r["id"]),
        name=r["name"],
        description=r.get("description") or "",
        category=r["category"],
    )


def _row_to_assignment(r: dict) -> StaffBadge:
    return StaffBadge(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        badge_id=str(r["badge_id"]),
        assigned_by=str(r["assigned_by"]),
        assigned_at=int(r["assigned_at"]),
        note=r.get("note"),
    )


class MySQLBadgeRepository(BadgeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_badges(self) -> Sequence[Badge]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_BADGE + " ORDER BY category, name")
            return [_row_to_badge(r) for r in fetchall(cur)]

    def get_badge(self, badge_id: str) -> Optional[Badge]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_BADGE + " WHERE id=%s", (badge_id,))
            r = fetchone(cur)
            return _row_to_badge(r) if r else None

    def add_badge(self, badge: Badge) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO badges(id, name, description, category) VALUES(%s,%s,%s,%s)",
                (badge.id, badge.name, badge.description, badge.category),
            )

    def list_for_employee(self, employee_id: str) -> Sequence[StaffBadge]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ASSIGNMENT + " WHERE employee_id=%s ORDER BY assigned_at DESC", (employee_id,))
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def get_assignment(self, assignment_id: str) -> Optional[StaffBadge]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ASSIGNMENT + " WHERE id=%s", (assignment_id,))
            r = fetchone(cur)
            return _row_to_assignment(r) if r else None

    def assign(self, assignment: StaffBadge) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_badges(id, employee_id, badge_id, assigned_by, assigned_at, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    assignment.id,
                    assignment.employee_id,
                    assignment.badge_id,
                    assignment.assigned_by,
                    assignment.assigned_at,
                    assignment.note,
                ),
            )

    def remove(self, assignment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff_badges WHERE id=%s", (assignment_id,))
            return cur.rowcount > 0
