from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from ..core.policy import Capability, can

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra: Any):
    payload = {"success": False, "message": message}
    payload.update(extra)
    return jsonify(payload), status


def json_ok(**data: Any):
    return jsonify({"success": True, **data})


def current_role() -> Optional[Role]:
    role = session.get("role")
    try:
        return Role(role) if role else None
    except ValueError:
        return None


def current_user_id() -> str:
    return str(session.get("user_id", ""))


def request_data() -> dict:
    """JSON body, or the form fields when the client posted a form."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def capability_required(capability: Capability):
    """Reject the request with 403 unless the session role holds ``capability``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please log in to continue", 401)
            if not can(session.get("role"), capability):
                return json_error("You are not allowed to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return json_error(str(e), 400, fields=e.fields)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_error(str(e), 404)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return json_error(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # Let Flask render its own HTTP errors (404 routes, 405 methods, ...).
        code = getattr(e, "code", None)
        if isinstance(code, int) and 400 <= code < 600:
            return json_error(getattr(e, "description", str(e)), code)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return json_error(f"Internal error: {e}", 500)
        return json_error("Internal error", 500)
