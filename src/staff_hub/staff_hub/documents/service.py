from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import optional_text, require_non_empty
from ..core.enums import DocumentCategory, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Document
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


class DocumentService:
    """Company handbook, policies and forms. Hidden documents are admin-only."""

    def __init__(
        self,
        documents: DocumentRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._documents = documents
        self._cache = cache
        self._new_id = id_factory

    def list_for(self, *, current_role: Role, category: Optional[DocumentCategory] = None) -> list[Document]:
        documents = self._cache.get_or_fetch(("documents",), self._documents.list_all)
        return [
            d
            for d in documents
            if (current_role == Role.ADMIN or d.is_visible) and (category is None or d.category == category)
        ]

    def get(self, document_id: str) -> Document:
        document = self._documents.get_by_id(document_id)
        if not document:
            raise NotFoundError("Document not found")
        return document

    def add(
        self,
        *,
        current_role: Role,
        title: str,
        description: str = "",
        category: DocumentCategory = DocumentCategory.OTHER,
        content: Optional[str] = None,
        file_url: Optional[str] = None,
        is_visible: bool = True,
    ) -> str:
        _require_admin(current_role)

        document = Document(
            id=self._new_id(),
            title=require_non_empty(title, "Title"),
            description=(description or "").strip(),
            category=category,
            is_visible=bool(is_visible),
            uploaded_at=datetime_to_ns(now_local()),
            content=optional_text(content),
            file_url=optional_text(file_url),
        )
        self._documents.add(document)
        self._cache.invalidate("documents")
        logger.info("Added document %s (%s)", document.id, document.category.value)
        return document.id

    def update(self, *, current_role: Role, document: Document) -> None:
        _require_admin(current_role)

        document = replace(document, title=require_non_empty(document.title, "Title"))
        if not self._documents.replace(document):
            raise NotFoundError("Document not found")
        self._cache.invalidate("documents")
        logger.info("Updated document %s", document.id)

    def delete(self, *, current_role: Role, document_id: str) -> None:
        _require_admin(current_role)

        if not self._documents.delete(document_id):
            raise NotFoundError("Document not found")
        self._cache.invalidate("documents")
        logger.info("Deleted document %s", document_id)
