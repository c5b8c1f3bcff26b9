from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DocumentCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Document
from .repository import DocumentRepository

_SELECT = """
    SELECT id, title, description, category, is_visible, uploaded_at, content, file_url
    FROM documents
"""


def _row_to_document(r: dict) -> Document:
    return Document(
        id=str(r["id"]),
        title=r["title"],
        description=r.get("description") or "",
        category=DocumentCategory(r["category"]),
        is_visible=bool(r.get("is_visible")),
        uploaded_at=int(r["uploaded_at"]),
        content=r.get("content"),
        file_url=r.get("file_url"),
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY uploaded_at DESC")
            return [_row_to_document(r) for r in fetchall(cur)]

    def get_by_id(self, document_id: str) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (document_id,))
            r = fetchone(cur)
            return _row_to_document(r) if r else None

    def add(self, document: Document) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO documents(id, title, description, category, is_visible, uploaded_at, content, file_url)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    document.id,
                    document.title,
                    document.description,
                    document.category.value,
                    int(document.is_visible),
                    document.uploaded_at,
                    document.content,
                    document.file_url,
                ),
            )

    def replace(self, document: Document) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE documents
                SET title=%s, description=%s, category=%s, is_visible=%s, content=%s, file_url=%s
                WHERE id=%s
                """,
                (
                    document.title,
                    document.description,
                    document.category.value,
                    int(document.is_visible),
                    document.content,
                    document.file_url,
                    document.id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, document_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM documents WHERE id=%s", (document_id,))
            return cur.rowcount > 0
