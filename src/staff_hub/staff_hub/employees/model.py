from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record.

    Note: pure data object; replaced wholesale on update.
    """

    id: str
    full_name: str
    job_title: str
    department: str
    email: str
    phone: str
    start_date: int
    is_active: bool
    role: Role
    account_level: Role
