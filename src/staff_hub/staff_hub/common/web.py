"""Helpers shared by the feature controllers.

The session is filled in by the external identity provider; controllers only
read ``session["employee_id"]`` and ``session["role"]``.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.EMPLOYEE


def current_employee_id() -> str:
    return str(session.get("employee_id") or "")


def login_required(view: Callable[..., Any]):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view: Callable[..., Any]):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return json_error("Please sign in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return json_error("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def handle_domain_errors(view: Callable[..., Any]):
    """Map service exceptions onto JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return json_error("Something went wrong, please try again", 500)

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}
