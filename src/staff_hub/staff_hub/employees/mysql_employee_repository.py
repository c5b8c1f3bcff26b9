from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, full_name, job_title, department, email, phone, start_date, is_active, role, account_level"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        id=str(r["id"]),
        full_name=r["full_name"],
        job_title=r.get("job_title") or "",
        department=r.get("department") or "",
        email=r.get("email") or "",
        phone=r.get("phone") or "",
        start_date=int(r["start_date"]),
        is_active=bool(r.get("is_active", True)),
        role=Role(r["role"]),
        account_level=Role(r.get("account_level") or r["role"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY full_name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def add(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employees({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.id,
                    employee.full_name,
                    employee.job_title,
                    employee.department,
                    employee.email,
                    employee.phone,
                    employee.start_date,
                    int(employee.is_active),
                    employee.role.value,
                    employee.account_level.value,
                ),
            )

    def replace(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, job_title=%s, department=%s, email=%s, phone=%s,
                    start_date=%s, is_active=%s, role=%s, account_level=%s
                WHERE id=%s
                """,
                (
                    employee.full_name,
                    employee.job_title,
                    employee.department,
                    employee.email,
                    employee.phone,
                    employee.start_date,
                    int(employee.is_active),
                    employee.role.value,
                    employee.account_level.value,
                    employee.id,
                ),
            )
            return cur.rowcount > 0
