from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import ToDoTask
from .repository import ToDoRepository

_SELECT = """
    SELECT id, title, description, duration_mins, assignee, recurrence_weekday, date,
           creator, created_timestamp, completed_by, completed_timestamp
    FROM todo_tasks
"""


def _row_to_task(r: dict) -> ToDoTask:
    return ToDoTask(
        id=str(r["id"]),
        title=r["title"],
        description=r.get("description") or "",
        duration_mins=int(r.get("duration_mins") or 0),
        assignee=str(r["assignee"]),
        creator=str(r["creator"]),
        created_timestamp=int(r["created_timestamp"]),
        recurrence_weekday=optional_int(r.get("recurrence_weekday")),
        date=optional_int(r.get("date")),
        completed_by=r.get("completed_by"),
        completed_timestamp=optional_int(r.get("completed_timestamp")),
    )


class MySQLToDoRepository(ToDoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ToDoTask]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_timestamp DESC")
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: str) -> Optional[ToDoTask]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (task_id,))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def add(self, task: ToDoTask) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO todo_tasks(id, title, description, duration_mins, assignee, recurrence_weekday,
                                       date, creator, created_timestamp)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    task.id,
                    task.title,
                    task.description,
                    task.duration_mins,
                    task.assignee,
                    task.recurrence_weekday,
                    task.date,
                    task.creator,
                    task.created_timestamp,
                ),
            )

    def mark_completed(self, *, task_id: str, completed_by: str, completed_timestamp: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE todo_tasks
                SET completed_by=%s, completed_timestamp=%s
                WHERE id=%s AND completed_by IS NULL
                """,
                (completed_by, completed_timestamp, task_id),
            )
            return cur.rowcount > 0
