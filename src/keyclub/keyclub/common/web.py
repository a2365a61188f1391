"""Helpers shared by the JSON controllers.

Session keys written at login and cleared at logout:
``s_number``, ``name``, ``role``.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data: Any = None, status: int = 200, **extra: Any):
    body = {"success": True, "data": to_jsonable(data)}
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def payload() -> dict:
    return request.get_json(silent=True) or {}


def current_s_number() -> str:
    return str(session["s_number"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "s_number" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "s_number" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def student_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "s_number" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.STUDENT.value:
            return fail("Only students can do this", 403)
        return view(*args, **kwargs)

    return wrapper
