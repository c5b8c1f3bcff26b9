from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, handle_domain_errors
from ..core.enums import PayrollPeriod
from ..core.exceptions import ValidationError
from ..container import Container


def _period_args() -> dict:
    period = request.args.get("period") or PayrollPeriod.CURRENT_WEEK.value
    try:
        parsed = PayrollPeriod(period)
    except ValueError:
        raise ValidationError(f"Unknown payroll period: {period!r}")
    return {
        "period": parsed,
        "today": date.today(),
        "custom_start": request.args.get("start"),
        "custom_end": request.args.get("end"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/payroll", methods=["GET"], endpoint="payroll_report")
    @admin_required
    @handle_domain_errors
    def payroll_report():
        report = container.payroll_report_service.build_report(current_role=current_role(), **_period_args())
        return jsonify(
            {
                "success": True,
                "start": report.start.strftime("%Y-%m-%d"),
                "end": report.end.strftime("%Y-%m-%d"),
                "rows": [asdict(r) for r in report.rows],
                "skipped_records": report.skipped_records,
            }
        )

    @app.route("/api/admin/payroll/export", methods=["GET"], endpoint="payroll_export")
    @admin_required
    @handle_domain_errors
    def payroll_export():
        filename, text = container.payroll_report_service.export_csv(current_role=current_role(), **_period_args())
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
