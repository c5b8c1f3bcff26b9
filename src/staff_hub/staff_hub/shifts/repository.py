from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Shift, ShiftNote


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def add(self, shift: Shift) -> None:
        raise NotImplementedError

    def replace(self, shift: Shift) -> bool:
        """Replace the whole shift, including its assignments."""

        raise NotImplementedError

    def delete(self, shift_id: str) -> bool:
        raise NotImplementedError

    def add_note(self, note: ShiftNote) -> None:
        raise NotImplementedError

    def list_notes(self, shift_id: str) -> Sequence[ShiftNote]:
        raise NotImplementedError
