from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Badge:
    """An achievement that can be awarded; ``category`` is one of BADGE_CATEGORIES."""

    id: str
    name: str
    description: str
    category: str


@dataclass(frozen=True)
class StaffBadge:
    id: str
    employee_id: str
    badge_id: str
    assigned_by: str
    assigned_at: int
    note: Optional[str] = None


@dataclass(frozen=True)
class AwardedBadge:
    assignment: StaffBadge
    badge: Optional[Badge]
