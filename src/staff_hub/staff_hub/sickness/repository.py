from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SicknessRecord


class SicknessRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[SicknessRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[SicknessRecord]:
        raise NotImplementedError

    def add(self, record: SicknessRecord) -> None:
        raise NotImplementedError

    def replace(self, record: SicknessRecord) -> bool:
        """Update in place by id; False if no such record."""

        raise NotImplementedError
