from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_ordered(start: int, end: int, *, start_name: str, end_name: str) -> None:
    if start > end:
        raise ValidationError(f"{end_name} cannot be before {start_name}")


def require_positive(value: int, field_name: str) -> int:
    if int(value) <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return int(value)


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
