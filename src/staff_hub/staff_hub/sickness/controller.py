from __future__ import annotations

from dataclasses import asdict, replace

from flask import Flask, jsonify

from ..common.datetime_utils import date_to_timestamp
from ..common.web import current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..container import Container
from .service import absence_days


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/sickness", methods=["GET"], endpoint="employee_sickness")
    @login_required
    @handle_domain_errors
    def employee_sickness(employee_id: str):
        history = container.sickness_service.history(
            employee_id,
            current_role=current_role(),
            viewer_id=current_employee_id(),
        )
        return jsonify(
            {
                "success": True,
                "records": [{**asdict(r), "days": absence_days(r)} for r in history.records],
                "total_days": history.total_days,
            }
        )

    @app.route("/api/employees/<employee_id>/sickness", methods=["POST"], endpoint="add_sickness")
    @login_required
    @handle_domain_errors
    def add_sickness(employee_id: str):
        data = json_body()
        record_id = container.sickness_service.add(
            current_role=current_role(),
            employee_id=employee_id,
            absence_start_date=data.get("absence_start_date", ""),
            absence_end_date=data.get("absence_end_date", ""),
            reason=data.get("reason", ""),
            return_note=data.get("return_note", ""),
        )
        return jsonify({"success": True, "id": record_id}), 201

    @app.route("/api/sickness/<record_id>", methods=["PUT"], endpoint="update_sickness")
    @login_required
    @handle_domain_errors
    def update_sickness(record_id: str):
        data = json_body()
        existing = container.sickness_service.get(record_id)

        changes: dict = {}
        if "absence_start_date" in data:
            changes["absence_start_date"] = date_to_timestamp(data["absence_start_date"])
        if "absence_end_date" in data:
            changes["absence_end_date"] = date_to_timestamp(data["absence_end_date"])
        if "reason" in data:
            changes["reason"] = str(data["reason"]).strip()
        if "return_note" in data:
            changes["return_note"] = str(data["return_note"]).strip()

        container.sickness_service.update(current_role=current_role(), record=replace(existing, **changes))
        return jsonify({"success": True})
