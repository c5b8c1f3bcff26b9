from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import HolidayRequestStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays/mine", methods=["GET"], endpoint="my_holidays")
    @login_required
    @handle_domain_errors
    def my_holidays():
        requests = container.holiday_service.list_for_employee(current_employee_id())
        return jsonify({"success": True, "requests": [asdict(r) for r in requests]})

    @app.route("/api/holidays", methods=["POST"], endpoint="submit_holiday")
    @login_required
    @handle_domain_errors
    def submit_holiday():
        data = json_body()
        request_id = container.holiday_service.submit(
            employee_id=current_employee_id(),
            start_date=data.get("start_date", ""),
            end_date=data.get("end_date", ""),
            reason=data.get("reason"),
        )
        return jsonify({"success": True, "id": request_id}), 201

    @app.route("/api/admin/holidays", methods=["GET"], endpoint="admin_holidays")
    @admin_required
    @handle_domain_errors
    def admin_holidays():
        status = request.args.get("status")
        if status:
            try:
                requests = container.holiday_service.list_by_status(HolidayRequestStatus(status))
            except ValueError:
                raise ValidationError(f"Unknown status: {status!r}")
        else:
            requests = container.holiday_service.list_all()
        return jsonify(
            {
                "success": True,
                "requests": [asdict(r) for r in requests],
                "statistics": asdict(container.holiday_service.statistics()),
            }
        )

    @app.route("/api/admin/holidays/<request_id>/approve", methods=["POST"], endpoint="approve_holiday")
    @admin_required
    @handle_domain_errors
    def approve_holiday(request_id: str):
        container.holiday_service.approve(current_role=current_role(), request_id=request_id)
        return jsonify({"success": True})

    @app.route("/api/admin/holidays/<request_id>/decline", methods=["POST"], endpoint="decline_holiday")
    @admin_required
    @handle_domain_errors
    def decline_holiday(request_id: str):
        container.holiday_service.decline(current_role=current_role(), request_id=request_id)
        return jsonify({"success": True})
