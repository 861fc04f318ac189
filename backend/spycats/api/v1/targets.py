"""Mission target endpoints, nested under ``/missions/<id>/targets``."""

from __future__ import annotations

from flask import Blueprint

from spycats.api.deps import (
    envelope,
    json_response,
    load_json,
    require_auth,
    require_role,
    timing,
    translate_service_errors,
)
from spycats.schemas import TargetCreateSchema, TargetNotesSchema, TargetSchema
from spycats.services._shared.policies.roles import STAFF_ROLES
from spycats.services.missions import TargetIn, TargetService

bp = Blueprint("targets", __name__)

target_schema = TargetSchema()
create_schema = TargetCreateSchema()
notes_schema = TargetNotesSchema()


@bp.post("/<int:mission_id>/targets")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def add_target(mission_id: int):
    payload = load_json(create_schema)
    target = TargetService().add_target(mission_id, TargetIn(**payload))
    return json_response(envelope(target_schema.dump(target)), status=201)


@bp.put("/<int:mission_id>/targets/<int:target_id>/notes")
@require_auth
@timing
@translate_service_errors
def update_notes(mission_id: int, target_id: int):
    """Replace field notes; frozen once the target or mission is complete."""

    payload = load_json(notes_schema)
    target = TargetService().update_notes(mission_id, target_id, payload["notes"])
    return json_response(envelope(target_schema.dump(target)))


@bp.put("/<int:mission_id>/targets/<int:target_id>/complete")
@require_auth
@timing
@translate_service_errors
def complete_target(mission_id: int, target_id: int):
    target = TargetService().complete_target(mission_id, target_id)
    return json_response(envelope(target_schema.dump(target)))


@bp.delete("/<int:mission_id>/targets/<int:target_id>")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def delete_target(mission_id: int, target_id: int):
    TargetService().delete_target(mission_id, target_id)
    return "", 204
