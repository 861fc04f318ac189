"""Dashboard statistics endpoint."""

from __future__ import annotations

from flask import Blueprint

from spycats.api.deps import envelope, json_response, require_role, timing, translate_service_errors
from spycats.schemas import DashboardSchema
from spycats.services._shared.policies.roles import STAFF_ROLES
from spycats.services.stats import StatsService

bp = Blueprint("stats", __name__)

dashboard_schema = DashboardSchema()


@bp.get("/dashboard")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def dashboard():
    return json_response(envelope(dashboard_schema.dump(StatsService().get_dashboard())))
