from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ResourceCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Resource
from .repository import ResourceRepository

_SELECT = """
    SELECT id, title, content, category, is_restricted, created_at
    FROM resources
"""


def _row_to_resource(r: dict) -> Resource:
    return Resource(
        id=str(r["id"]),
        title=r["title"],
        content=r.get("content") or "",
        category=ResourceCategory(r["category"]),
        is_restricted=bool(r.get("is_restricted")),
        created_at=int(r["created_at"]),
    )


class MySQLResourceRepository(ResourceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_category(self, category: Optional[ResourceCategory] = None) -> Sequence[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            if category is None:
                cur.execute(_SELECT + " ORDER BY category, title")
            else:
                cur.execute(_SELECT + " WHERE category=%s ORDER BY title", (category.value,))
            return [_row_to_resource(r) for r in fetchall(cur)]

    def get_by_id(self, resource_id: str) -> Optional[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (resource_id,))
            r = fetchone(cur)
            return _row_to_resource(r) if r else None

    def add(self, resource: Resource) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO resources(id, title, content, category, is_restricted, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    resource.id,
                    resource.title,
                    resource.content,
                    resource.category.value,
                    int(resource.is_restricted),
                    resource.created_at,
                ),
            )

    def replace(self, resource: Resource) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE resources SET title=%s, content=%s, category=%s, is_restricted=%s WHERE id=%s",
                (
                    resource.title,
                    resource.content,
                    resource.category.value,
                    int(resource.is_restricted),
                    resource.id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, resource_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM resources WHERE id=%s", (resource_id,))
            return cur.rowcount > 0
