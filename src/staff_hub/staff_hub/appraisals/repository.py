from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AppraisalRecord


class AppraisalRepository(Protocol):
    def list_all(self) -> Sequence[AppraisalRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AppraisalRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AppraisalRecord]:
        raise NotImplementedError

    def add(self, record: AppraisalRecord) -> None:
        raise NotImplementedError

    def replace(self, record: AppraisalRecord) -> bool:
        """Update in place by id (no duplicate history row)."""

        raise NotImplementedError
