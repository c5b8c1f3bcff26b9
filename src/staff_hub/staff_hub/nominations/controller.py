from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import current_month
from ..common.web import admin_required, current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/nominations", methods=["GET"], endpoint="nominations_by_month")
    @login_required
    @handle_domain_errors
    def nominations_by_month():
        month = request.args.get("month") or current_month()
        summaries = container.nomination_service.by_month(month)
        winner = container.nomination_service.winner(month)
        return jsonify(
            {
                "success": True,
                "month": month,
                "nominees": [
                    {"nominee": s.nominee, "count": s.count, "nominations": [asdict(n) for n in s.nominations]}
                    for s in summaries
                ],
                "winner": asdict(winner) if winner else None,
            }
        )

    @app.route("/api/nominations", methods=["POST"], endpoint="submit_nomination")
    @login_required
    @handle_domain_errors
    def submit_nomination():
        data = json_body()
        nomination_id = container.nomination_service.submit(
            nominator=current_employee_id(),
            nominee=data.get("nominee", ""),
            reason=data.get("reason", ""),
        )
        return jsonify({"success": True, "id": nomination_id}), 201

    @app.route("/api/admin/nominations/<month>/winner", methods=["POST"], endpoint="set_nomination_winner")
    @admin_required
    @handle_domain_errors
    def set_nomination_winner(month: str):
        container.nomination_service.set_winner(
            current_role=current_role(),
            month=month,
            employee_id=json_body().get("employee_id", ""),
        )
        return jsonify({"success": True})

    @app.route("/api/admin/nominations/<month>/bonus", methods=["POST"], endpoint="mark_nomination_bonus")
    @admin_required
    @handle_domain_errors
    def mark_nomination_bonus(month: str):
        container.nomination_service.mark_bonus(current_role=current_role(), month=month)
        return jsonify({"success": True})
