"""Liveness and readiness probe."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from spycats.api.deps import json_response, timing
from spycats.core.extensions import db, get_cache

bp = Blueprint("health", __name__)


def _database_ok() -> bool:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("health: database check failed")
        return False
    return True


@bp.get("/health")
@timing
def healthcheck():
    """200 when the database and cache both answer, otherwise 503 ``degraded``."""
    checks = {"db": _database_ok(), "cache": get_cache().ping()}
    healthy = all(checks.values())
    payload = {
        "status": "ok" if healthy else "degraded",
        **{name: "ok" if passed else "fail" for name, passed in checks.items()},
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if healthy else 503)
