"""Mission endpoints."""

from __future__ import annotations

from flask import Blueprint, url_for

from spycats.api.deps import (
    envelope,
    json_response,
    load_json,
    parse_pagination,
    require_auth,
    require_role,
    timing,
    translate_service_errors,
)
from spycats.schemas import (
    MissionAssignSchema,
    MissionCreateSchema,
    MissionListQuerySchema,
    MissionSchema,
)
from spycats.services._shared.policies.roles import STAFF_ROLES
from spycats.services.missions import MissionCreateIn, MissionListIn, MissionService, TargetIn

bp = Blueprint("missions", __name__)

mission_schema = MissionSchema()
missions_schema = MissionSchema(many=True)
create_schema = MissionCreateSchema()
assign_schema = MissionAssignSchema()
list_query_schema = MissionListQuerySchema()


@bp.get("")
@require_auth
@timing
@translate_service_errors
def list_missions():
    """List missions, optionally filtered by ``complete`` and ``cat_id``."""

    pagination, filters = parse_pagination(list_query_schema)
    result = MissionService().list_missions(
        MissionListIn(pagination=pagination.to_dto(), filters=filters or None)
    )
    return json_response(envelope(missions_schema.dump(result.items), meta=result.meta))


@bp.get("/<int:mission_id>")
@require_auth
@timing
@translate_service_errors
def get_mission(mission_id: int):
    mission = MissionService().get_mission(mission_id)
    return json_response(envelope(mission_schema.dump(mission)))


@bp.post("")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def create_mission():
    """Open a mission with one to three targets and an optional cat."""

    payload = load_json(create_schema)
    dto = MissionCreateIn(
        targets=[TargetIn(**target) for target in payload["targets"]],
        cat_id=payload.get("cat_id"),
    )
    mission = MissionService().create_mission(dto)
    response = json_response(envelope(mission_schema.dump(mission)), status=201)
    response.headers["Location"] = url_for("missions.get_mission", mission_id=mission.id)
    return response


@bp.put("/<int:mission_id>/assign")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def assign_cat(mission_id: int):
    payload = load_json(assign_schema)
    mission = MissionService().assign_cat(mission_id, payload["cat_id"])
    return json_response(envelope(mission_schema.dump(mission)))


@bp.put("/<int:mission_id>/complete")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def complete_mission(mission_id: int):
    mission = MissionService().complete_mission(mission_id)
    return json_response(envelope(mission_schema.dump(mission)))


@bp.delete("/<int:mission_id>")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def delete_mission(mission_id: int):
    MissionService().delete_mission(mission_id)
    return "", 204
