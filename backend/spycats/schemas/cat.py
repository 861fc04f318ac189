"""Cat resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from spycats.models.cat import MAX_EXPERIENCE, MIN_EXPERIENCE
from spycats.schemas.common import NonBlankString, PaginationQuerySchema


class CatCreateSchema(Schema):
    """Payload for hiring a cat."""

    name = NonBlankString(required=True, validate=validate.Length(max=100))
    breed = NonBlankString(required=True, validate=validate.Length(max=50))
    experience = fields.Integer(
        required=True, validate=validate.Range(min=MIN_EXPERIENCE, max=MAX_EXPERIENCE)
    )
    salary = fields.Float(required=True, validate=validate.Range(min=0))


class CatSalarySchema(Schema):
    """Payload for a salary change."""

    salary = fields.Float(required=True, validate=validate.Range(min=0))


class CatListQuerySchema(PaginationQuerySchema):
    """Query parameters accepted by the cats list endpoint."""

    breed = fields.String(load_default=None)


class CatSchema(Schema):
    """Representation of a spy cat."""

    id = fields.Integer(dump_only=True)
    name = fields.String(dump_only=True)
    breed = fields.String(dump_only=True)
    experience = fields.Integer(dump_only=True)
    salary = fields.Float(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
