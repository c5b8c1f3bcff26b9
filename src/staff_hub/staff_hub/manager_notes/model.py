from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ManagerNoteType


@dataclass(frozen=True)
class ManagerNote:
    id: str
    employee_id: str
    author_employee_id: str
    note_type: ManagerNoteType
    content: str
    created_at: int
