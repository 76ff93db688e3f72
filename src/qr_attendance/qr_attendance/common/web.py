from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.constants import STUDENT_SESSION_KEY
from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateAttendanceError,
    EventNotFoundError,
    StorageUnavailableError,
)
from ..students.service import StudentSession

logger = logging.getLogger(__name__)

STAFF_ROLE = "staff"


def json_error(message: str, status: int, *, code: str = "error", retryable: bool = False):
    return jsonify({"success": False, "code": code, "message": message, "retryable": retryable}), status


def status_for(exc: DomainError) -> int:
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, EventNotFoundError):
        return 404
    if isinstance(exc, DuplicateAttendanceError):
        return 409
    if isinstance(exc, StorageUnavailableError):
        return 503
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        logger.warning("%s %s rejected code=%s: %s", request.method, request.path, e.code, e)
        return json_error(str(e), status_for(e), code=e.code, retryable=e.retryable)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # routing 404/405 and the like keep their own status
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return json_error("Internal server error", 500, code="internal_error")


def current_student() -> StudentSession | None:
    data = session.get(STUDENT_SESSION_KEY)
    return StudentSession.from_dict(data) if data else None


def student_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if STUDENT_SESSION_KEY not in session:
            return json_error("Please log in with your student ID", 401, code="login_required")
        return view(*args, **kwargs)

    return wrapper


def staff_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if session.get("role") != STAFF_ROLE:
            return json_error("Staff access only", 403, code="forbidden")
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}
