from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime
from typing import Optional

from flask import Flask, jsonify

from ..common.datetime_utils import date_to_timestamp, now_local
from ..common.web import admin_required, current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import AppraisalType
from ..core.exceptions import ValidationError
from ..container import Container
from .projector import AppraisalProjection


def _parse_type(value: str) -> AppraisalType:
    try:
        return AppraisalType(value)
    except ValueError:
        raise ValidationError(f"Unknown appraisal type: {value!r}")


def _date_str(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def _projection_json(p: AppraisalProjection) -> dict:
    return {
        "last_appraisal": asdict(p.last_appraisal) if p.last_appraisal else None,
        "next_due": _date_str(p.next_due),
        "status": p.status.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/appraisals/mine", methods=["GET"], endpoint="my_appraisals")
    @login_required
    @handle_domain_errors
    def my_appraisals():
        employee_id = current_employee_id()
        records = container.appraisal_service.list_for_employee(employee_id)
        projection = container.appraisal_service.projection_for(employee_id, now=now_local())
        return jsonify(
            {
                "success": True,
                "records": [asdict(r) for r in records],
                "projection": _projection_json(projection),
            }
        )

    @app.route("/api/admin/appraisals", methods=["GET"], endpoint="appraisal_dashboard")
    @admin_required
    @handle_domain_errors
    def appraisal_dashboard():
        rows = container.appraisal_service.dashboard(current_role=current_role(), now=now_local())
        return jsonify(
            {
                "success": True,
                "rows": [
                    {"employee_id": r.employee.id, "full_name": r.employee.full_name, **_projection_json(r.projection)}
                    for r in rows
                ],
            }
        )

    @app.route("/api/appraisals", methods=["POST"], endpoint="schedule_appraisal")
    @login_required
    @handle_domain_errors
    def schedule_appraisal():
        data = json_body()
        record_id = container.appraisal_service.schedule(
            current_role=current_role(),
            employee_id=data.get("employee_id", ""),
            scheduled_date=data.get("scheduled_date", ""),
            appraisal_type=_parse_type(data.get("appraisal_type", "")),
            notes=data.get("notes", ""),
            is_complete=bool(data.get("is_complete", False)),
        )
        return jsonify({"success": True, "id": record_id}), 201

    @app.route("/api/appraisals/<record_id>", methods=["PUT"], endpoint="update_appraisal")
    @login_required
    @handle_domain_errors
    def update_appraisal(record_id: str):
        data = json_body()
        existing = container.appraisal_service.get(record_id)

        changes: dict = {}
        if "scheduled_date" in data:
            changes["scheduled_date"] = date_to_timestamp(data["scheduled_date"])
        if "appraisal_type" in data:
            changes["appraisal_type"] = _parse_type(data["appraisal_type"])
        if "notes" in data:
            changes["notes"] = str(data["notes"]).strip()
        if "is_complete" in data:
            changes["is_complete"] = bool(data["is_complete"])

        container.appraisal_service.update(current_role=current_role(), record=replace(existing, **changes))
        return jsonify({"success": True})

    @app.route("/api/appraisals/<record_id>/complete", methods=["POST"], endpoint="complete_appraisal")
    @login_required
    @handle_domain_errors
    def complete_appraisal(record_id: str):
        container.appraisal_service.mark_complete(
            current_role=current_role(),
            record_id=record_id,
            notes=json_body().get("notes", ""),
        )
        return jsonify({"success": True})
