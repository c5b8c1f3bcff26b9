from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ToDoTask


class ToDoRepository(Protocol):
    def list_all(self) -> Sequence[ToDoTask]:
        raise NotImplementedError

    def get_by_id(self, task_id: str) -> Optional[ToDoTask]:
        raise NotImplementedError

    def add(self, task: ToDoTask) -> None:
        raise NotImplementedError

    def mark_completed(self, *, task_id: str, completed_by: str, completed_timestamp: int) -> bool:
        """Set the completion fields; False if the task was already completed."""

        raise NotImplementedError
