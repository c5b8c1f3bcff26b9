from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import DocumentCategory, Role
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.staff_hub.staff_hub.documents.model import Document
from src.staff_hub.staff_hub.documents.service import DocumentService


class InMemoryDocuments:
    def __init__(self):
        self.documents: dict[str, Document] = {}

    def list_all(self):
        return list(self.documents.values())

    def get_by_id(self, document_id: str) -> Optional[Document]:
        return self.documents.get(document_id)

    def add(self, document: Document) -> None:
        self.documents[document.id] = document

    def replace(self, document: Document) -> bool:
        if document.id not in self.documents:
            return False
        self.documents[document.id] = document
        return True

    def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None


@pytest.fixture
def repo() -> InMemoryDocuments:
    return InMemoryDocuments()


@pytest.fixture
def service(repo) -> DocumentService:
    ids = iter(f"d{i}" for i in range(1, 100))
    return DocumentService(repo, QueryCache(stale_seconds=30), id_factory=lambda: next(ids))


def test_hidden_documents_are_admin_only(service):
    service.add(current_role=Role.ADMIN, title="Staff handbook", category=DocumentCategory.HANDBOOK)
    service.add(current_role=Role.ADMIN, title="Draft policy", category=DocumentCategory.POLICY, is_visible=False)

    assert [d.title for d in service.list_for(current_role=Role.EMPLOYEE)] == ["Staff handbook"]
    assert len(service.list_for(current_role=Role.ADMIN)) == 2


def test_category_filter(service):
    service.add(current_role=Role.ADMIN, title="Staff handbook", category=DocumentCategory.HANDBOOK)
    service.add(current_role=Role.ADMIN, title="Holiday form", category=DocumentCategory.FORM)

    forms = service.list_for(current_role=Role.EMPLOYEE, category=DocumentCategory.FORM)

    assert [d.title for d in forms] == ["Holiday form"]


def test_hiding_a_document_refreshes_listings(service, repo):
    document_id = service.add(current_role=Role.ADMIN, title="Staff handbook")
    assert service.list_for(current_role=Role.MANAGER)

    service.update(current_role=Role.ADMIN, document=replace(repo.documents[document_id], is_visible=False))

    assert service.list_for(current_role=Role.MANAGER) == []


def test_only_admins_manage_documents(service):
    with pytest.raises(AuthorizationError):
        service.add(current_role=Role.MANAGER, title="Staff handbook")
    with pytest.raises(ValidationError):
        service.add(current_role=Role.ADMIN, title="  ")
    with pytest.raises(NotFoundError):
        service.delete(current_role=Role.ADMIN, document_id="missing")
