from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Badge, StaffBadge


class BadgeRepository(Protocol):
    def list_badges(self) -> Sequence[Badge]:
        raise NotImplementedError

    def get_badge(self, badge_id: str) -> Optional[Badge]:
        raise NotImplementedError

    def add_badge(self, badge: Badge) -> None:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[StaffBadge]:
        raise NotImplementedError

    def get_assignment(self, assignment_id: str) -> Optional[StaffBadge]:
        raise NotImplementedError

    def assign(self, assignment: StaffBadge) -> None:
        raise NotImplementedError

    def remove(self, assignment_id: str) -> bool:
        raise NotImplementedError
