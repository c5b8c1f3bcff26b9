from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import TYPE_CHECKING

from ..core.constants import PAYROLL_CSV_HEADERS

if TYPE_CHECKING:
    from .service import PayrollReport


def payroll_csv_filename(start: datetime, end: datetime) -> str:
    return f"payroll-{start.strftime('%Y-%m-%d')}-to-{end.strftime('%Y-%m-%d')}.csv"


def render_payroll_csv(report: "PayrollReport") -> str:
    """Header plus one row per employee; every cell quoted, rows joined by ``\\n``.

    Hours are rounded to two decimals here and nowhere earlier.
    """

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(PAYROLL_CSV_HEADERS)
    for row in report.rows:
        writer.writerow(
            [
                row.employee_name,
                f"{row.worked_hours:.2f}",
                f"{row.paid_leave_hours:.2f}",
                f"{row.unpaid_leave_hours:.2f}",
                f"{row.sickness_hours:.2f}",
                str(row.holiday_days),
            ]
        )
    return out.getvalue().removesuffix("\n")


def parse_payroll_csv(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text)))
