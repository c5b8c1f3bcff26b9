from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_employee_id, current_role, handle_domain_errors, json_body, login_required
from ..core.exceptions import ValidationError
from ..container import Container
from .model import EVERYONE


def register(app: Flask, container: Container) -> None:
    @app.route("/api/todos", methods=["GET"], endpoint="my_todos")
    @login_required
    @handle_domain_errors
    def my_todos():
        on = request.args.get("date")
        on_date = parse_iso_date(on) if on else date.today()
        tasks = container.todo_service.tasks_for(current_employee_id(), on_date)
        return jsonify(
            {
                "success": True,
                "pending": [asdict(t) for t in tasks if not t.is_completed],
                "completed": [asdict(t) for t in tasks if t.is_completed],
            }
        )

    @app.route("/api/todos", methods=["POST"], endpoint="create_todo")
    @login_required
    @handle_domain_errors
    def create_todo():
        data = json_body()
        weekday = data.get("recurrence_weekday")
        try:
            weekday = int(weekday) if weekday not in (None, "") else None
            duration = int(data.get("duration_mins") or 0)
        except (TypeError, ValueError):
            raise ValidationError("Duration and day of week must be whole numbers")

        task_id = container.todo_service.create(
            current_role=current_role(),
            creator=current_employee_id(),
            title=data.get("title", ""),
            description=data.get("description", ""),
            duration_mins=duration,
            assignee=data.get("assignee") or EVERYONE,
            recurrence_weekday=weekday,
            date=data.get("date") or None,
        )
        return jsonify({"success": True, "id": task_id}), 201

    @app.route("/api/todos/<task_id>/complete", methods=["POST"], endpoint="complete_todo")
    @login_required
    @handle_domain_errors
    def complete_todo(task_id: str):
        container.todo_service.complete(task_id=task_id, employee_id=current_employee_id())
        return jsonify({"success": True})
