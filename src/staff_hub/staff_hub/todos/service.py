from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import (
    DateLike,
    date_to_timestamp,
    datetime_to_ns,
    is_same_day,
    js_weekday,
    now_local,
    try_ns_to_datetime,
)
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import EVERYONE, ToDoTask
from .repository import ToDoRepository

logger = logging.getLogger(__name__)

_TASK_SETTER_ROLES = {Role.ADMIN, Role.MANAGER}


def is_assigned_to(task: ToDoTask, employee_id: str) -> bool:
    return task.is_for_everyone or task.assignee == employee_id


def is_due_on(task: ToDoTask, on_date: DateLike) -> bool:
    """Weekly tasks fall on their weekday, dated tasks on their date, undated one-offs every day."""

    if task.is_recurring:
        return js_weekday(on_date) == task.recurrence_weekday
    if task.date is None:
        return True
    task_day = try_ns_to_datetime(task.date)
    return task_day is not None and is_same_day(task_day, on_date)


class TodoService:
    def __init__(
        self,
        tasks: ToDoRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._tasks = tasks
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[ToDoTask]:
        return list(self._cache.get_or_fetch(("todos",), self._tasks.list_all))

    def tasks_for(self, employee_id: str, on_date: DateLike) -> list[ToDoTask]:
        return [t for t in self.list_all() if is_assigned_to(t, employee_id) and is_due_on(t, on_date)]

    def create(
        self,
        *,
        current_role: Role,
        creator: str,
        title: str,
        description: str = "",
        duration_mins: int = 0,
        assignee: str = EVERYONE,
        recurrence_weekday: Optional[int] = None,
        date: Optional[str] = None,
    ) -> str:
        if current_role not in _TASK_SETTER_ROLES:
            raise AuthorizationError("Only managers can create tasks")

        if recurrence_weekday is not None:
            if not 0 <= int(recurrence_weekday) <= 6:
                raise ValidationError("Day of week must be between 0 (Sunday) and 6 (Saturday)")
            if date:
                raise ValidationError("A weekly task cannot also have a date")
        if int(duration_mins or 0) < 0:
            raise ValidationError("Duration cannot be negative")

        task = ToDoTask(
            id=self._new_id(),
            title=require_non_empty(title, "Title"),
            description=(description or "").strip(),
            duration_mins=int(duration_mins or 0),
            assignee=require_non_empty(assignee, "Assignee"),
            creator=require_non_empty(creator, "Creator"),
            created_timestamp=datetime_to_ns(now_local()),
            recurrence_weekday=None if recurrence_weekday is None else int(recurrence_weekday),
            date=date_to_timestamp(date) if date else None,
        )
        self._tasks.add(task)
        self._cache.invalidate("todos")
        logger.info("Created task %s for %s", task.id, task.assignee)
        return task.id

    def complete(self, *, task_id: str, employee_id: str) -> None:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")
        if task.is_completed:
            raise ValidationError("Task is already completed")
        if not is_assigned_to(task, employee_id):
            raise AuthorizationError("This task is assigned to someone else")

        done = self._tasks.mark_completed(
            task_id=task_id,
            completed_by=employee_id,
            completed_timestamp=datetime_to_ns(now_local()),
        )
        if not done:
            raise ValidationError("Task is already completed")
        self._cache.invalidate("todos")
        logger.info("Task %s completed by %s", task_id, employee_id)
