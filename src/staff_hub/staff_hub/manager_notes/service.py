from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import ManagerNoteType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .model import ManagerNote
from .repository import ManagerNoteRepository

logger = logging.getLogger(__name__)

_NOTE_ROLES = {Role.ADMIN, Role.MANAGER}


def _require_manager(current_role: Role) -> None:
    if current_role not in _NOTE_ROLES:
        raise AuthorizationError("Manager notes are only visible to managers")


class ManagerNoteService:
    def __init__(
        self,
        notes: ManagerNoteRepository,
        employees: EmployeeService,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._notes = notes
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def list_for_employee(
        self,
        employee_id: str,
        *,
        current_role: Role,
        note_type: Optional[ManagerNoteType] = None,
    ) -> list[ManagerNote]:
        """Newest first, optionally narrowed to one note type."""

        _require_manager(current_role)
        notes = self._cache.get_or_fetch(
            ("managerNotes", employee_id),
            lambda: self._notes.list_for_employee(employee_id),
        )
        return sorted(
            (n for n in notes if note_type is None or n.note_type == note_type),
            key=lambda n: n.created_at,
            reverse=True,
        )

    def get(self, note_id: str) -> ManagerNote:
        note = self._notes.get_by_id(note_id)
        if not note:
            raise NotFoundError("Note not found")
        return note

    def add(
        self,
        *,
        current_role: Role,
        employee_id: str,
        author_employee_id: str,
        note_type: ManagerNoteType,
        content: str,
    ) -> str:
        _require_manager(current_role)
        if not author_employee_id:
            raise ValidationError("Your account is not linked to an employee record")

        employee = self._employees.get(require_non_empty(employee_id, "Employee"))
        note = ManagerNote(
            id=self._new_id(),
            employee_id=employee.id,
            author_employee_id=author_employee_id,
            note_type=note_type,
            content=require_non_empty(content, "Note content"),
            created_at=datetime_to_ns(now_local()),
        )
        self._notes.add(note)
        self._cache.invalidate("managerNotes", employee.id)
        logger.info("%s note %s added for %s by %s", note_type.value, note.id, employee.id, author_employee_id)
        return note.id

    def update(
        self,
        *,
        current_role: Role,
        note_id: str,
        note_type: Optional[ManagerNoteType] = None,
        content: Optional[str] = None,
    ) -> None:
        _require_manager(current_role)

        note = self.get(note_id)
        updated = replace(
            note,
            note_type=note_type or note.note_type,
            content=note.content if content is None else require_non_empty(content, "Note content"),
        )
        if not self._notes.replace(updated):
            raise NotFoundError("Note not found")
        self._cache.invalidate("managerNotes", note.employee_id)
        logger.info("Updated note %s", note_id)

    def delete(self, *, current_role: Role, note_id: str) -> None:
        _require_manager(current_role)

        note = self.get(note_id)
        if not self._notes.delete(note_id):
            raise NotFoundError("Note not found")
        self._cache.invalidate("managerNotes", note.employee_id)
        logger.info("Deleted note %s", note_id)
