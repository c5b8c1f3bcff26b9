from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ResourceCategory


@dataclass(frozen=True)
class Resource:
    """Internal reference material: logins, price lists, forms."""

    id: str
    title: str
    content: str
    category: ResourceCategory
    is_restricted: bool
    created_at: int
