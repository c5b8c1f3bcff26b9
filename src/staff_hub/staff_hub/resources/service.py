from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import ResourceCategory, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Resource
from .repository import ResourceRepository

logger = logging.getLogger(__name__)

# Restricted resources are shown to these roles only.
_RESTRICTED_VIEWER_ROLES = {Role.ADMIN, Role.MANAGER}


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


class ResourceService:
    def __init__(
        self,
        resources: ResourceRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._resources = resources
        self._cache = cache
        self._new_id = id_factory

    def list_for(self, *, current_role: Role, category: Optional[ResourceCategory] = None) -> list[Resource]:
        key = ("resources", category.value if category else "all")
        resources = self._cache.get_or_fetch(key, lambda: self._resources.list_by_category(category))
        if current_role in _RESTRICTED_VIEWER_ROLES:
            return list(resources)
        return [r for r in resources if not r.is_restricted]

    def grouped(self, *, current_role: Role) -> dict[ResourceCategory, list[Resource]]:
        """Every category present as a key, in declaration order, even when empty."""

        groups: dict[ResourceCategory, list[Resource]] = {c: [] for c in ResourceCategory}
        for resource in self.list_for(current_role=current_role):
            groups[resource.category].append(resource)
        return groups

    def get(self, resource_id: str) -> Resource:
        resource = self._resources.get_by_id(resource_id)
        if not resource:
            raise NotFoundError("Resource not found")
        return resource

    def add(
        self,
        *,
        current_role: Role,
        title: str,
        content: str = "",
        category: ResourceCategory = ResourceCategory.OTHER,
        is_restricted: bool = False,
    ) -> str:
        _require_admin(current_role)

        resource = Resource(
            id=self._new_id(),
            title=require_non_empty(title, "Title"),
            content=(content or "").strip(),
            category=category,
            is_restricted=bool(is_restricted),
            created_at=datetime_to_ns(now_local()),
        )
        self._resources.add(resource)
        self._cache.invalidate("resources")
        logger.info("Added resource %s (%s)", resource.id, resource.category.value)
        return resource.id

    def update(self, *, current_role: Role, resource: Resource) -> None:
        _require_admin(current_role)

        resource = replace(resource, title=require_non_empty(resource.title, "Title"))
        if not self._resources.replace(resource):
            raise NotFoundError("Resource not found")
        self._cache.invalidate("resources")
        logger.info("Updated resource %s", resource.id)

    def delete(self, *, current_role: Role, resource_id: str) -> None:
        _require_admin(current_role)

        if not self._resources.delete(resource_id):
            raise NotFoundError("Resource not found")
        self._cache.invalidate("resources")
        logger.info("Deleted resource %s", resource_id)
