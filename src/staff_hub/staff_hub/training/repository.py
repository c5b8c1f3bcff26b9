from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TrainingRecord


class TrainingRepository(Protocol):
    def list_all(self) -> Sequence[TrainingRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[TrainingRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[TrainingRecord]:
        raise NotImplementedError

    def add(self, record: TrainingRecord) -> None:
        raise NotImplementedError

    def replace(self, record: TrainingRecord) -> bool:
        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError
