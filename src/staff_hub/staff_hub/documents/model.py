from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DocumentCategory


@dataclass(frozen=True)
class Document:
    id: str
    title: str
    description: str
    category: DocumentCategory
    is_visible: bool
    uploaded_at: int
    content: Optional[str] = None
    file_url: Optional[str] = None
