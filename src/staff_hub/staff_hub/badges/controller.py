from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/badges", methods=["GET"], endpoint="list_badges")
    @login_required
    @handle_domain_errors
    def list_badges():
        groups = container.badge_service.search(request.args.get("q", ""))
        return jsonify({"success": True, "groups": {c: [asdict(b) for b in items] for c, items in groups.items()}})

    @app.route("/api/admin/badges", methods=["POST"], endpoint="create_badge")
    @admin_required
    @handle_domain_errors
    def create_badge():
        data = json_body()
        badge_id = container.badge_service.create_badge(
            current_role=current_role(),
            name=data.get("name", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
        )
        return jsonify({"success": True, "id": badge_id}), 201

    @app.route("/api/employees/<employee_id>/badges", methods=["GET"], endpoint="employee_badges")
    @login_required
    @handle_domain_errors
    def employee_badges(employee_id: str):
        awarded = container.badge_service.awarded_to(employee_id)
        return jsonify(
            {
                "success": True,
                "badges": [
                    {**asdict(a.assignment), "badge": asdict(a.badge) if a.badge else None}
                    for a in awarded
                ],
            }
        )

    @app.route("/api/employees/<employee_id>/badges", methods=["POST"], endpoint="assign_badge")
    @admin_required
    @handle_domain_errors
    def assign_badge(employee_id: str):
        data = json_body()
        assignment_id = container.badge_service.assign(
            current_role=current_role(),
            employee_id=employee_id,
            badge_id=data.get("badge_id", ""),
            assigned_by=current_employee_id(),
            note=data.get("note"),
        )
        return jsonify({"success": True, "id": assignment_id}), 201

    @app.route("/api/staff-badges/<assignment_id>", methods=["DELETE"], endpoint="remove_badge")
    @admin_required
    @handle_domain_errors
    def remove_badge(assignment_id: str):
        container.badge_service.remove(current_role=current_role(), assignment_id=assignment_id)
        return jsonify({"success": True})
