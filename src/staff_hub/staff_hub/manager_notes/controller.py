from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import ManagerNoteType
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_type(value: str) -> ManagerNoteType:
    try:
        return ManagerNoteType(value)
    except ValueError:
        raise ValidationError(f"Unknown note type: {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/manager-notes", methods=["GET"], endpoint="employee_manager_notes")
    @login_required
    @handle_domain_errors
    def employee_manager_notes(employee_id: str):
        note_type = request.args.get("type")
        notes = container.manager_note_service.list_for_employee(
            employee_id,
            current_role=current_role(),
            note_type=_parse_type(note_type) if note_type and note_type != "all" else None,
        )
        names = container.employee_service.name_lookup()
        return jsonify(
            {
                "success": True,
                "notes": [{**asdict(n), "author_name": names.get(n.author_employee_id, "Unknown")} for n in notes],
            }
        )

    @app.route("/api/employees/<employee_id>/manager-notes", methods=["POST"], endpoint="add_manager_note")
    @login_required
    @handle_domain_errors
    def add_manager_note(employee_id: str):
        data = json_body()
        note_id = container.manager_note_service.add(
            current_role=current_role(),
            employee_id=employee_id,
            author_employee_id=current_employee_id(),
            note_type=_parse_type(data.get("note_type") or ManagerNoteType.GENERAL.value),
            content=data.get("content", ""),
        )
        return jsonify({"success": True, "id": note_id}), 201

    @app.route("/api/manager-notes/<note_id>", methods=["PUT"], endpoint="update_manager_note")
    @login_required
    @handle_domain_errors
    def update_manager_note(note_id: str):
        data = json_body()
        container.manager_note_service.update(
            current_role=current_role(),
            note_id=note_id,
            note_type=_parse_type(data["note_type"]) if data.get("note_type") else None,
            content=data.get("content"),
        )
        return jsonify({"success": True})

    @app.route("/api/manager-notes/<note_id>", methods=["DELETE"], endpoint="delete_manager_note")
    @login_required
    @handle_domain_errors
    def delete_manager_note(note_id: str):
        container.manager_note_service.delete(current_role=current_role(), note_id=note_id)
        return jsonify({"success": True})
