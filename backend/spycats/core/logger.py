"""
Logging setup for the agency API.

Every record leaving the root handler carries the correlation id of the
request that produced it and, once a bearer token has been verified, the
caller's ``user_id``. Output is one JSON object per line unless
``LOG_FORMAT=text`` is configured.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

#: Incoming headers accepted as the correlation id, in priority order.
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

#: ``extra=`` attributes copied into JSON output. Anything else is dropped.
EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "backend", "item_count")

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def ensure_request_id() -> str:
    """
    Correlation id of the current request.

    The first call in a request adopts an incoming correlation header or mints
    a UUID4 and pins it on ``flask.g``. Outside a request every call returns a
    fresh UUID4.
    """
    if not has_request_context():
        return str(uuid4())
    pinned = g.get("request_id")
    if pinned:
        return str(pinned)
    incoming = next(
        (request.headers[name] for name in CORRELATION_HEADERS if request.headers.get(name)),
        None,
    )
    g.request_id = incoming or str(uuid4())
    return str(g.request_id)


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, request id, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            {key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` (and ``user_id`` when authenticated) on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True
        record.request_id = ensure_request_id()
        claims = g.get("claims")
        if claims is not None and not hasattr(record, "user_id"):
            record.user_id = claims.user_id
        return True


def configure_logging(level: str | int = "INFO", fmt: str = "json") -> None:
    """
    Replace the root handlers with a single stdout handler.

    Parameters
    ----------
    level:
        Level name or number; unknown names fall back to ``INFO``.
    fmt:
        ``"json"`` for :class:`JSONFormatter`, ``"text"`` for a plain line.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JSONFormatter() if fmt != "text" else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    root.setLevel(level)


def init_app(app: Flask) -> None:
    """Pin a correlation id on every request and echo it on the response."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _pin_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "EXTRA_KEYS",
    "JSONFormatter",
    "REQUEST_ID_HEADER",
    "RequestIdFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
