from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

EVERYONE = "everyone"


@dataclass(frozen=True)
class ToDoTask:
    """Domain entity: a to-do task.

    ``assignee`` is either ``EVERYONE`` or an employee id.
    ``recurrence_weekday`` is None for one-off tasks, otherwise the weekday the
    task repeats on (Sunday=0 .. Saturday=6).
    Completion is one-way: once ``completed_by`` is set it is never cleared.
    """

    id: str
    title: str
    description: str
    duration_mins: int
    assignee: str
    creator: str
    created_timestamp: int
    recurrence_weekday: Optional[int] = None
    date: Optional[int] = None
    completed_by: Optional[str] = None
    completed_timestamp: Optional[int] = None

    @property
    def is_for_everyone(self) -> bool:
        return self.assignee == EVERYONE

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_weekday is not None

    @property
    def is_completed(self) -> bool:
        return bool(self.completed_by)
