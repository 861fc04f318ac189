"""
HTTP error model for the API.

Every failure leaves the app as an RFC 7807 ``application/problem+json``
document carrying a stable ``code`` and the request's ``request_id``.
Services raise their own exceptions; ``BaseService.translate_exceptions``
turns those into the :class:`APIError` family below.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from spycats.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def status_code_slug(status: int) -> str:
    """``404`` -> ``"not_found"``; unknown statuses map to ``"error"``."""
    try:
        return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "error"


def problem_response(
    status: int, code: str, detail: str, *, details: dict[str, Any] | None = None
) -> tuple[Response, int]:
    """Render a problem document and return it with ``status``."""
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": detail,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details

    if status >= 500:
        log.error("%s %s: %s", status, code, detail, exc_info=True)
    else:
        log.warning("%s %s: %s", status, code, detail)

    response = jsonify(body)
    response.mimetype = PROBLEM_MIMETYPE
    return response, status


class APIError(Exception):
    """
    Error with a known HTTP rendering.

    :param message: Client-safe description (the problem ``detail``).
    :param status_code: HTTP status; the class default when omitted.
    :param code: Machine-readable snake_case code; the class default when omitted.
    :param details: Optional structured payload.
    """

    status: HTTPStatus = HTTPStatus.BAD_REQUEST
    default_code = "bad_request"
    default_message = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = int(status_code or self.status)
        self.code = code or self.default_code
        self.details = details or {}


class NotFound(APIError):
    status = HTTPStatus.NOT_FOUND
    default_code = "not_found"
    default_message = "Resource not found"


class Conflict(APIError):
    status = HTTPStatus.CONFLICT
    default_code = "conflict"
    default_message = "Conflict"


class Unauthorized(APIError):
    status = HTTPStatus.UNAUTHORIZED
    default_code = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(APIError):
    status = HTTPStatus.FORBIDDEN
    default_code = "forbidden"
    default_message = "Forbidden"


class PreconditionFailed(APIError):
    status = HTTPStatus.PRECONDITION_FAILED
    default_code = "precondition_failed"
    default_message = "ETag does not match the current resource"


class ServiceUnavailable(APIError):
    """A backing store (database or cache) cannot be reached."""

    status = HTTPStatus.SERVICE_UNAVAILABLE
    default_code = "service_unavailable"
    default_message = "Service temporarily unavailable"


def init_app(app: Flask) -> None:
    """Register problem+json handlers; raw database and server errors are never echoed."""

    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        return problem_response(
            err.status_code, err.code, err.message, details=err.details or None
        )

    @app.errorhandler(ValidationError)
    def _validation_error(err: ValidationError):
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            details={"errors": err.normalized_messages()},
        )

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        status = err.code or HTTPStatus.INTERNAL_SERVER_ERROR
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        else:
            detail = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(status, status_code_slug(status), detail)

    @app.errorhandler(IntegrityError)
    def _integrity_error(err: IntegrityError):
        return problem_response(HTTPStatus.CONFLICT, "conflict", "Resource conflict")

    @app.errorhandler(OperationalError)
    def _operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
        )

    @app.errorhandler(Exception)
    def _unexpected_error(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
        )
