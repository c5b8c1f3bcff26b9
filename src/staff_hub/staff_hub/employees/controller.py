from __future__ import annotations

from dataclasses import asdict, replace

from flask import Flask, jsonify

from ..common.datetime_utils import date_to_timestamp
from ..common.web import admin_required, current_role, handle_domain_errors, json_body, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

_EDITABLE_FIELDS = ("full_name", "job_title", "department", "email", "phone")


def _parse_role(value: str) -> Role:
    try:
        return Role(value or Role.EMPLOYEE.value)
    except ValueError:
        raise ValidationError(f"Unknown role: {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    @handle_domain_errors
    def list_employees():
        employees = container.employee_service.list_all()
        return jsonify({"success": True, "employees": [asdict(e) for e in employees]})

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    @handle_domain_errors
    def get_employee(employee_id: str):
        return jsonify({"success": True, "employee": asdict(container.employee_service.get(employee_id))})

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    @handle_domain_errors
    def add_employee():
        data = json_body()
        employee_id = container.employee_service.add(
            current_role=current_role(),
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            start_date=data.get("start_date", ""),
            job_title=data.get("job_title", ""),
            department=data.get("department", ""),
            phone=data.get("phone", ""),
            role=_parse_role(data.get("role")),
        )
        return jsonify({"success": True, "id": employee_id}), 201

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    @handle_domain_errors
    def update_employee(employee_id: str):
        data = json_body()
        employee = container.employee_service.get(employee_id)

        changes = {k: str(data[k]).strip() for k in _EDITABLE_FIELDS if k in data}
        if "start_date" in data:
            changes["start_date"] = date_to_timestamp(data["start_date"])
        if "role" in data:
            changes["role"] = changes["account_level"] = _parse_role(data["role"])
        if "is_active" in data:
            changes["is_active"] = bool(data["is_active"])

        container.employee_service.update(current_role=current_role(), employee=replace(employee, **changes))
        return jsonify({"success": True})

    @app.route("/api/employees/<employee_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    @admin_required
    @handle_domain_errors
    def deactivate_employee(employee_id: str):
        container.employee_service.deactivate(current_role=current_role(), employee_id=employee_id)
        return jsonify({"success": True})
