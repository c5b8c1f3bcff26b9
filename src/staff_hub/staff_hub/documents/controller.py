from __future__ import annotations

from dataclasses import asdict, replace

from flask import Flask, jsonify, request

from ..common.validators import optional_text
from ..common.web import admin_required, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import DocumentCategory
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_category(value: str) -> DocumentCategory:
    try:
        return DocumentCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown document category: {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/documents", methods=["GET"], endpoint="list_documents")
    @login_required
    @handle_domain_errors
    def list_documents():
        category = request.args.get("category")
        documents = container.document_service.list_for(
            current_role=current_role(),
            category=_parse_category(category) if category else None,
        )
        return jsonify({"success": True, "documents": [asdict(d) for d in documents]})

    @app.route("/api/documents", methods=["POST"], endpoint="add_document")
    @admin_required
    @handle_domain_errors
    def add_document():
        data = json_body()
        document_id = container.document_service.add(
            current_role=current_role(),
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=_parse_category(data.get("category") or DocumentCategory.OTHER.value),
            content=data.get("content"),
            file_url=data.get("file_url"),
            is_visible=bool(data.get("is_visible", True)),
        )
        return jsonify({"success": True, "id": document_id}), 201

    @app.route("/api/documents/<document_id>", methods=["PUT"], endpoint="update_document")
    @admin_required
    @handle_domain_errors
    def update_document(document_id: str):
        data = json_body()
        existing = container.document_service.get(document_id)

        changes: dict = {}
        if "title" in data:
            changes["title"] = str(data["title"]).strip()
        if "description" in data:
            changes["description"] = str(data["description"]).strip()
        if "category" in data:
            changes["category"] = _parse_category(data["category"])
        if "content" in data:
            changes["content"] = optional_text(data["content"])
        if "file_url" in data:
            changes["file_url"] = optional_text(data["file_url"])
        if "is_visible" in data:
            changes["is_visible"] = bool(data["is_visible"])

        container.document_service.update(current_role=current_role(), document=replace(existing, **changes))
        return jsonify({"success": True})

    @app.route("/api/documents/<document_id>", methods=["DELETE"], endpoint="delete_document")
    @admin_required
    @handle_domain_errors
    def delete_document(document_id: str):
        container.document_service.delete(current_role=current_role(), document_id=document_id)
        return jsonify({"success": True})
