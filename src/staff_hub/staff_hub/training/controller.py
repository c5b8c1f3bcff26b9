from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime

from flask import Flask, jsonify

from ..common.datetime_utils import expiry_status, now_local, optional_date_to_timestamp
from ..common.web import admin_required, current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import TrainingStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import TrainingRecord


def _parse_status(value: str) -> TrainingStatus:
    try:
        return TrainingStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown training status: {value!r}")


def _record_json(record: TrainingRecord, now: datetime) -> dict:
    status = expiry_status(record.expiry_date, now=now)
    return {**asdict(record), "expiry_status": status.value if status else None}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/training", methods=["GET"], endpoint="employee_training")
    @login_required
    @handle_domain_errors
    def employee_training(employee_id: str):
        records = container.training_service.list_for_employee(
            employee_id,
            current_role=current_role(),
            viewer_id=current_employee_id(),
        )
        now = now_local()
        return jsonify({"success": True, "records": [_record_json(r, now) for r in records]})

    @app.route("/api/employees/<employee_id>/training", methods=["POST"], endpoint="add_training")
    @admin_required
    @handle_domain_errors
    def add_training(employee_id: str):
        data = json_body()
        record_id = container.training_service.add(
            current_role=current_role(),
            employee_id=employee_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            status=_parse_status(data.get("status") or TrainingStatus.PENDING.value),
            completion_date=data.get("completion_date"),
            expiry_date=data.get("expiry_date"),
        )
        return jsonify({"success": True, "id": record_id}), 201

    @app.route("/api/training/<record_id>", methods=["PUT"], endpoint="update_training")
    @admin_required
    @handle_domain_errors
    def update_training(record_id: str):
        data = json_body()
        existing = container.training_service.get(record_id)

        changes: dict = {}
        if "title" in data:
            changes["title"] = str(data["title"]).strip()
        if "description" in data:
            changes["description"] = str(data["description"]).strip()
        if "status" in data:
            changes["status"] = _parse_status(data["status"])
        if "completion_date" in data:
            changes["completion_date"] = optional_date_to_timestamp(data["completion_date"])
        if "expiry_date" in data:
            changes["expiry_date"] = optional_date_to_timestamp(data["expiry_date"])

        container.training_service.update(current_role=current_role(), record=replace(existing, **changes))
        return jsonify({"success": True})

    @app.route("/api/training/<record_id>", methods=["DELETE"], endpoint="delete_training")
    @admin_required
    @handle_domain_errors
    def delete_training(record_id: str):
        container.training_service.delete(current_role=current_role(), record_id=record_id)
        return jsonify({"success": True})

    @app.route("/api/admin/training/summary", methods=["GET"], endpoint="training_summary")
    @admin_required
    @handle_domain_errors
    def training_summary():
        rows = container.training_service.summary(current_role=current_role(), now=now_local())
        return jsonify(
            {
                "success": True,
                "rows": [
                    {
                        "employee_id": r.employee.id,
                        "full_name": r.employee.full_name,
                        "experiences": list(r.experiences),
                        "expired": r.expired,
                        "expiring_soon": r.expiring_soon,
                    }
                    for r in rows
                ],
            }
        )
