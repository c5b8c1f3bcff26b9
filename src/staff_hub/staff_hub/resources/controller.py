from __future__ import annotations

from dataclasses import asdict, replace

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import ResourceCategory
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_category(value: str) -> ResourceCategory:
    try:
        return ResourceCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown resource category: {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/resources", methods=["GET"], endpoint="list_resources")
    @login_required
    @handle_domain_errors
    def list_resources():
        category = request.args.get("category")
        if category:
            resources = container.resource_service.list_for(
                current_role=current_role(),
                category=_parse_category(category),
            )
            return jsonify({"success": True, "resources": [asdict(r) for r in resources]})

        groups = container.resource_service.grouped(current_role=current_role())
        return jsonify(
            {
                "success": True,
                "groups": {c.value: [asdict(r) for r in items] for c, items in groups.items()},
            }
        )

    @app.route("/api/resources", methods=["POST"], endpoint="add_resource")
    @admin_required
    @handle_domain_errors
    def add_resource():
        data = json_body()
        resource_id = container.resource_service.add(
            current_role=current_role(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=_parse_category(data.get("category") or ResourceCategory.OTHER.value),
            is_restricted=bool(data.get("is_restricted", False)),
        )
        return jsonify({"success": True, "id": resource_id}), 201

    @app.route("/api/resources/<resource_id>", methods=["PUT"], endpoint="update_resource")
    @admin_required
    @handle_domain_errors
    def update_resource(resource_id: str):
        data = json_body()
        existing = container.resource_service.get(resource_id)

        changes: dict = {}
        if "title" in data:
            changes["title"] = str(data["title"]).strip()
        if "content" in data:
            changes["content"] = str(data["content"]).strip()
        if "category" in data:
            changes["category"] = _parse_category(data["category"])
        if "is_restricted" in data:
            changes["is_restricted"] = bool(data["is_restricted"])

        container.resource_service.update(current_role=current_role(), resource=replace(existing, **changes))
        return jsonify({"success": True})

    @app.route("/api/resources/<resource_id>", methods=["DELETE"], endpoint="delete_resource")
    @admin_required
    @handle_domain_errors
    def delete_resource(resource_id: str):
        container.resource_service.delete(current_role=current_role(), resource_id=resource_id)
        return jsonify({"success": True})
