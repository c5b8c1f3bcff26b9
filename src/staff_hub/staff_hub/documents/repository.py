from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Document


class DocumentRepository(Protocol):
    def list_all(self) -> Sequence[Document]:
        raise NotImplementedError

    def get_by_id(self, document_id: str) -> Optional[Document]:
        raise NotImplementedError

    def add(self, document: Document) -> None:
        raise NotImplementedError

    def replace(self, document: Document) -> bool:
        raise NotImplementedError

    def delete(self, document_id: str) -> bool:
        raise NotImplementedError
