"""Mission and target resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from spycats.schemas.common import NonBlankString, PaginationQuerySchema


class TargetCreateSchema(Schema):
    """Payload describing one target."""

    name = NonBlankString(required=True, validate=validate.Length(max=100))
    country = NonBlankString(required=True, validate=validate.Length(max=50))
    notes = fields.String(load_default="", validate=validate.Length(max=500))


class TargetNotesSchema(Schema):
    """Payload for replacing a target's notes."""

    notes = fields.String(required=True, validate=validate.Length(max=500))


class MissionCreateSchema(Schema):
    """
    Payload for opening a mission.

    The target count is checked by the service so that it reports
    ``invalid_target_count`` like every other entry point.
    """

    targets = fields.List(fields.Nested(TargetCreateSchema), required=True)
    cat_id = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))


class MissionAssignSchema(Schema):
    """Payload for assigning a cat to a mission."""

    cat_id = fields.Integer(required=True, validate=validate.Range(min=1))


class MissionListQuerySchema(PaginationQuerySchema):
    """Query parameters accepted by the missions list endpoint."""

    complete = fields.Boolean(load_default=None)
    cat_id = fields.Integer(load_default=None)


class TargetSchema(Schema):
    """Representation of a mission target."""

    id = fields.Integer(dump_only=True)
    mission_id = fields.Integer(dump_only=True)
    name = fields.String(dump_only=True)
    country = fields.String(dump_only=True)
    notes = fields.String(dump_only=True)
    complete = fields.Boolean(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class MissionSchema(Schema):
    """Representation of a mission with its targets."""

    id = fields.Integer(dump_only=True)
    cat_id = fields.Integer(dump_only=True, allow_none=True)
    complete = fields.Boolean(dump_only=True)
    targets = fields.List(fields.Nested(TargetSchema), dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
