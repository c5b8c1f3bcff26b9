from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, session

from ..common.web import current_role, handle_domain_errors, json_body, login_required
from ..core.constants import EXPERIENCE_OPTIONS
from ..core.enums import StockRequestStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stock-requests", methods=["GET"], endpoint="stock_requests_board")
    @login_required
    @handle_domain_errors
    def stock_requests_board():
        open_requests = container.stock_request_service.list_open()
        columns = {
            status.value: [asdict(r) for r in open_requests if r.status == status]
            for status in (StockRequestStatus.REQUESTED, StockRequestStatus.ORDERED, StockRequestStatus.DELIVERED)
        }
        return jsonify({"success": True, "columns": columns, "experiences": list(EXPERIENCE_OPTIONS)})

    @app.route("/api/stock-requests/archive", methods=["GET"], endpoint="stock_requests_archive")
    @login_required
    @handle_domain_errors
    def stock_requests_archive():
        archived = container.stock_request_service.list_archived()
        return jsonify({"success": True, "requests": [asdict(r) for r in archived]})

    @app.route("/api/stock-requests", methods=["POST"], endpoint="submit_stock_request")
    @login_required
    @handle_domain_errors
    def submit_stock_request():
        data = json_body()
        try:
            quantity = int(data.get("quantity") or 1)
        except (TypeError, ValueError):
            raise ValidationError("Quantity must be a whole number")

        request_id = container.stock_request_service.submit(
            item_name=data.get("item_name", ""),
            experience=data.get("experience", ""),
            quantity=quantity,
            submitter_name=data.get("submitter_name") or session.get("name", ""),
            notes=data.get("notes", ""),
        )
        return jsonify({"success": True, "id": request_id}), 201

    @app.route("/api/stock-requests/<request_id>/advance", methods=["POST"], endpoint="advance_stock_request")
    @login_required
    @handle_domain_errors
    def advance_stock_request(request_id: str):
        status = container.stock_request_service.advance(request_id, current_role=current_role())
        return jsonify({"success": True, "status": status.value})
