from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ManagerNote


class ManagerNoteRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[ManagerNote]:
        raise NotImplementedError

    def get_by_id(self, note_id: str) -> Optional[ManagerNote]:
        raise NotImplementedError

    def add(self, note: ManagerNote) -> None:
        raise NotImplementedError

    def replace(self, note: ManagerNote) -> bool:
        raise NotImplementedError

    def delete(self, note_id: str) -> bool:
        raise NotImplementedError
