from __future__ import annotations

from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import ResourceCategory, Role
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError
from src.staff_hub.staff_hub.resources.model import Resource
from src.staff_hub.staff_hub.resources.service import ResourceService


class InMemoryResources:
    def __init__(self):
        self.resources: dict[str, Resource] = {}
        self.fetches = 0

    def list_by_category(self, category: Optional[ResourceCategory] = None):
        self.fetches += 1
        return [r for r in self.resources.values() if category is None or r.category == category]

    def get_by_id(self, resource_id: str) -> Optional[Resource]:
        return self.resources.get(resource_id)

    def add(self, resource: Resource) -> None:
        self.resources[resource.id] = resource

    def replace(self, resource: Resource) -> bool:
        if resource.id not in self.resources:
            return False
        self.resources[resource.id] = resource
        return True

    def delete(self, resource_id: str) -> bool:
        return self.resources.pop(resource_id, None) is not None


@pytest.fixture
def repo() -> InMemoryResources:
    return InMemoryResources()


@pytest.fixture
def service(repo) -> ResourceService:
    ids = iter(f"r{i}" for i in range(1, 100))
    return ResourceService(repo, QueryCache(stale_seconds=30), id_factory=lambda: next(ids))


def _seed(service: ResourceService) -> None:
    service.add(current_role=Role.ADMIN, title="Till login", category=ResourceCategory.LOGINS, is_restricted=True)
    service.add(current_role=Role.ADMIN, title="Party prices", category=ResourceCategory.PRICES)


def test_restricted_resources_are_hidden_from_staff(service):
    _seed(service)

    assert [r.title for r in service.list_for(current_role=Role.EMPLOYEE)] == ["Party prices"]
    assert {r.title for r in service.list_for(current_role=Role.MANAGER)} == {"Till login", "Party prices"}


def test_grouped_has_every_category(service):
    _seed(service)

    groups = service.grouped(current_role=Role.EMPLOYEE)

    assert list(groups) == list(ResourceCategory)
    assert groups[ResourceCategory.LOGINS] == []
    assert [r.title for r in groups[ResourceCategory.PRICES]] == ["Party prices"]


def test_category_reads_are_cached_until_a_write(service, repo):
    _seed(service)
    service.list_for(current_role=Role.ADMIN, category=ResourceCategory.PRICES)
    service.list_for(current_role=Role.ADMIN, category=ResourceCategory.PRICES)
    assert repo.fetches == 1

    service.add(current_role=Role.ADMIN, title="Gift vouchers", category=ResourceCategory.PRICES)

    prices = service.list_for(current_role=Role.ADMIN, category=ResourceCategory.PRICES)
    assert len(prices) == 2
    assert repo.fetches == 2


def test_only_admins_manage_resources(service):
    with pytest.raises(AuthorizationError):
        service.add(current_role=Role.MANAGER, title="Wifi")
    with pytest.raises(NotFoundError):
        service.delete(current_role=Role.ADMIN, resource_id="missing")
