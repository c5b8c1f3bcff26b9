from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ResourceCategory
from .model import Resource


class ResourceRepository(Protocol):
    def list_by_category(self, category: Optional[ResourceCategory] = None) -> Sequence[Resource]:
        raise NotImplementedError

    def get_by_id(self, resource_id: str) -> Optional[Resource]:
        raise NotImplementedError

    def add(self, resource: Resource) -> None:
        raise NotImplementedError

    def replace(self, resource: Resource) -> bool:
        raise NotImplementedError

    def delete(self, resource_id: str) -> bool:
        raise NotImplementedError
