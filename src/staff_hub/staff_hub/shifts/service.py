from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import DateLike, datetime_to_ns, get_week_dates, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty, require_ordered
from ..core.enums import Role, ShiftCategory
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Shift, ShiftNote
from .repository import ShiftRepository
from .rota import RotaDay, group_shifts_by_day

logger = logging.getLogger(__name__)

_SCHEDULER_ROLES = {Role.ADMIN, Role.MANAGER}


class ShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._shifts = shifts
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[Shift]:
        return list(self._cache.get_or_fetch(("shifts",), self._shifts.list_all))

    def list_for_employee(self, employee_id: str) -> list[Shift]:
        return list(
            self._cache.get_or_fetch(
                ("shifts", "employee", employee_id),
                lambda: self._shifts.list_for_employee(employee_id),
            )
        )

    def get(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def weekly_rota(self, reference: DateLike, *, employee_id: Optional[str] = None) -> list[RotaDay]:
        shifts = self.list_for_employee(employee_id) if employee_id else self.list_all()
        return group_shifts_by_day(get_week_dates(reference), shifts)

    @staticmethod
    def _validate(shift: Shift) -> Shift:
        require_non_empty(shift.department, "Department")
        require_ordered(shift.start_time, shift.end_time, start_name="Start time", end_name="End time")
        if not shift.assigned_employees:
            raise ValidationError("Assign at least one employee")
        if len(set(shift.assigned_employees)) != len(shift.assigned_employees):
            raise ValidationError("An employee is assigned twice")
        return shift

    def add(
        self,
        *,
        current_role: Role,
        date: int,
        start_time: int,
        end_time: int,
        department: str,
        assigned_employees: Sequence[str],
        category: ShiftCategory = ShiftCategory.WORKED,
    ) -> str:
        if current_role not in _SCHEDULER_ROLES:
            raise AuthorizationError("Only managers can edit the rota")

        shift = self._validate(
            Shift(
                id=self._new_id(),
                date=date,
                start_time=start_time,
                end_time=end_time,
                department=(department or "").strip(),
                assigned_employees=tuple(assigned_employees),
                category=category,
            )
        )
        self._shifts.add(shift)
        self._cache.invalidate("shifts")
        logger.info("Added %s shift %s with %d employee(s)", shift.category.value, shift.id, len(shift.assigned_employees))
        return shift.id

    def update(self, *, current_role: Role, shift: Shift) -> None:
        if current_role not in _SCHEDULER_ROLES:
            raise AuthorizationError("Only managers can edit the rota")

        if not self._shifts.replace(self._validate(shift)):
            raise NotFoundError("Shift not found")
        self._cache.invalidate("shifts")
        logger.info("Updated shift %s", shift.id)

    def delete(self, *, current_role: Role, shift_id: str) -> None:
        if current_role not in _SCHEDULER_ROLES:
            raise AuthorizationError("Only managers can edit the rota")

        if not self._shifts.delete(shift_id):
            raise NotFoundError("Shift not found")
        self._cache.invalidate("shifts")
        self._cache.invalidate("shiftNotes", shift_id)
        logger.info("Deleted shift %s", shift_id)

    def add_note(self, *, shift_id: str, note_text: str, employee_id: Optional[str] = None) -> str:
        self.get(shift_id)
        note = ShiftNote(
            id=self._new_id(),
            shift_id=shift_id,
            note_text=require_non_empty(note_text, "Note"),
            created_timestamp=datetime_to_ns(now_local()),
            employee_id=employee_id or None,
        )
        self._shifts.add_note(note)
        self._cache.invalidate("shiftNotes", shift_id)
        return note.id

    def list_notes(self, shift_id: str) -> list[ShiftNote]:
        return list(self._cache.get_or_fetch(("shiftNotes", shift_id), lambda: self._shifts.list_notes(shift_id)))
