from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import date_time_to_timestamp, date_to_timestamp, parse_iso_date
from ..common.web import current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import ShiftCategory
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Shift


def _parse_category(value: str) -> ShiftCategory:
    try:
        return ShiftCategory(value or ShiftCategory.WORKED.value)
    except ValueError:
        raise ValidationError(f"Unknown shift category: {value!r}")


def _shift_fields(data: dict) -> dict:
    """Form payload (``date``, ``start``, ``end`` as YYYY-MM-DD / HH:MM) to Shift fields."""

    day = data.get("date", "")
    assigned = data.get("assigned_employees") or []
    if not isinstance(assigned, list):
        raise ValidationError("assigned_employees must be a list")
    return {
        "date": date_to_timestamp(day),
        "start_time": date_time_to_timestamp(day, data.get("start", "")),
        "end_time": date_time_to_timestamp(day, data.get("end", "")),
        "department": data.get("department", ""),
        "assigned_employees": tuple(str(e) for e in assigned),
        "category": _parse_category(data.get("category")),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rota", methods=["GET"], endpoint="weekly_rota")
    @login_required
    @handle_domain_errors
    def weekly_rota():
        week_of = request.args.get("week_of")
        reference = parse_iso_date(week_of) if week_of else date.today()
        mine = request.args.get("mine") == "1"

        days = container.shift_service.weekly_rota(
            reference,
            employee_id=current_employee_id() if mine else None,
        )
        return jsonify(
            {
                "success": True,
                "days": [
                    {"date": d.day.strftime("%Y-%m-%d"), "shifts": [asdict(s) for s in d.shifts]}
                    for d in days
                ],
            }
        )

    @app.route("/api/shifts", methods=["POST"], endpoint="add_shift")
    @login_required
    @handle_domain_errors
    def add_shift():
        shift_id = container.shift_service.add(current_role=current_role(), **_shift_fields(json_body()))
        return jsonify({"success": True, "id": shift_id}), 201

    @app.route("/api/shifts/<shift_id>", methods=["PUT"], endpoint="update_shift")
    @login_required
    @handle_domain_errors
    def update_shift(shift_id: str):
        container.shift_service.update(
            current_role=current_role(),
            shift=Shift(id=shift_id, **_shift_fields(json_body())),
        )
        return jsonify({"success": True})

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @login_required
    @handle_domain_errors
    def delete_shift(shift_id: str):
        container.shift_service.delete(current_role=current_role(), shift_id=shift_id)
        return jsonify({"success": True})

    @app.route("/api/shifts/<shift_id>/notes", methods=["GET"], endpoint="list_shift_notes")
    @login_required
    @handle_domain_errors
    def list_shift_notes(shift_id: str):
        notes = container.shift_service.list_notes(shift_id)
        return jsonify({"success": True, "notes": [asdict(n) for n in notes]})

    @app.route("/api/shifts/<shift_id>/notes", methods=["POST"], endpoint="add_shift_note")
    @login_required
    @handle_domain_errors
    def add_shift_note(shift_id: str):
        note_id = container.shift_service.add_note(
            shift_id=shift_id,
            note_text=json_body().get("note_text", ""),
            employee_id=current_employee_id(),
        )
        return jsonify({"success": True, "id": note_id}), 201
