from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import optional_text, require_non_empty
from ..core.constants import BADGE_CATEGORIES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .model import AwardedBadge, Badge, StaffBadge
from .repository import BadgeRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


def group_by_category(badges: list[Badge]) -> dict[str, list[Badge]]:
    """Keys follow first appearance in ``badges``."""

    groups: dict[str, list[Badge]] = {}
    for badge in badges:
        groups.setdefault(badge.category, []).append(badge)
    return groups


class BadgeService:
    def __init__(
        self,
        badges: BadgeRepository,
        employees: EmployeeService,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._badges = badges
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def list_badges(self) -> list[Badge]:
        return list(self._cache.get_or_fetch(("badges",), self._badges.list_badges))

    def search(self, query: str = "") -> dict[str, list[Badge]]:
        """Case-insensitive match on name, description or category, grouped by category."""

        q = (query or "").strip().lower()
        matches = [
            b
            for b in self.list_badges()
            if not q or q in b.name.lower() or q in b.description.lower() or q in b.category.lower()
        ]
        return group_by_category(matches)

    def awarded_to(self, employee_id: str) -> list[AwardedBadge]:
        assignments = self._cache.get_or_fetch(
            ("staffBadges", employee_id),
            lambda: self._badges.list_for_employee(employee_id),
        )
        by_id = {b.id: b for b in self.list_badges()}
        return [
            AwardedBadge(assignment=a, badge=by_id.get(a.badge_id))
            for a in sorted(assignments, key=lambda a: a.assigned_at, reverse=True)
        ]

    def create_badge(self, *, current_role: Role, name: str, description: str, category: str) -> str:
        _require_admin(current_role)
        if category not in BADGE_CATEGORIES:
            raise ValidationError(f"Unknown badge category: {category}")

        badge = Badge(
            id=self._new_id(),
            name=require_non_empty(name, "Badge name"),
            description=(description or "").strip(),
            category=category,
        )
        self._badges.add_badge(badge)
        self._cache.invalidate("badges")
        logger.info("Created badge %s (%s)", badge.id, badge.name)
        return badge.id

    def assign(
        self,
        *,
        current_role: Role,
        employee_id: str,
        badge_id: str,
        assigned_by: str,
        note: Optional[str] = None,
    ) -> str:
        _require_admin(current_role)

        employee = self._employees.get(require_non_empty(employee_id, "Employee"))
        badge = self._badges.get_badge(require_non_empty(badge_id, "Badge"))
        if not badge:
            raise NotFoundError("Badge not found")

        assignment = StaffBadge(
            id=self._new_id(),
            employee_id=employee.id,
            badge_id=badge.id,
            assigned_by=require_non_empty(assigned_by, "Assigned by"),
            assigned_at=datetime_to_ns(now_local()),
            note=optional_text(note),
        )
        self._badges.assign(assignment)
        self._cache.invalidate("staffBadges", employee.id)
        logger.info("Awarded %s to %s", badge.name, employee.id)
        return assignment.id

    def remove(self, *, current_role: Role, assignment_id: str) -> None:
        _require_admin(current_role)

        assignment = self._badges.get_assignment(assignment_id)
        if not assignment or not self._badges.remove(assignment_id):
            raise NotFoundError("Badge assignment not found")
        self._cache.invalidate("staffBadges", assignment.employee_id)
        logger.info("Removed badge assignment %s from %s", assignment_id, assignment.employee_id)
