from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

# Every ErrorKind must appear here; tests assert the table is exhaustive.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.EMPLOYEE_NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.ALREADY_CLOCKED_IN: 409,
    ErrorKind.ALREADY_CLOCKED_OUT: 409,
    ErrorKind.NOT_CLOCKED_IN: 400,
    ErrorKind.NO_CLOCK_IN_FOUND: 404,
    ErrorKind.DUPLICATE_RECORD: 409,
    ErrorKind.MULTIPLE_RECORDS_FOUND: 500,
    ErrorKind.INSUFFICIENT_LEAVE_DAYS: 400,
    ErrorKind.CONFLICTING_LEAVE_REQUEST: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_STATUS_TRANSITION: 400,
}

# Integrity violations are system defects, not caller mistakes.
_DEFECT_KINDS = frozenset({ErrorKind.MULTIPLE_RECORDS_FOUND})


def error_body(code: str, message: str, status_code: int, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "code": code,
        "message": message,
        "status_code": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "details": {},
    }
    payload.update(extra)
    return {"error": payload}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = STATUS_BY_KIND[exc.kind]
        if exc.kind in _DEFECT_KINDS:
            logger.error("System defect: %s", exc.message, exc_info=exc)
        else:
            logger.info("Request rejected (%s): %s", exc.code, exc.message)

        body = exc.to_dict()
        body["status_code"] = status
        body["timestamp"] = datetime.now(timezone.utc).isoformat()
        return jsonify({"error": body}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        status = exc.code or 500
        code = (exc.name or "HTTP_ERROR").upper().replace(" ", "_")
        return jsonify(error_body(code, exc.description or exc.name, status)), status

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception")
        return jsonify(error_body("INTERNAL_SERVER_ERROR", "An internal server error occurred.", 500)), 500
