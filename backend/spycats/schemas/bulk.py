"""Bulk operation schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from spycats.schemas.cat import CatCreateSchema


class SalaryUpdateItemSchema(Schema):
    id = fields.Integer(required=True, validate=validate.Range(min=1))
    salary = fields.Float(required=True, validate=validate.Range(min=0))


class BulkSalarySchema(Schema):
    """Payload for ``PUT /bulk/cats/salary``; the size limit is enforced by the service."""

    updates = fields.List(
        fields.Nested(SalaryUpdateItemSchema), required=True, validate=validate.Length(min=1)
    )


class BulkCatCreateSchema(Schema):
    """Payload for ``POST /bulk/cats``."""

    cats = fields.List(
        fields.Nested(CatCreateSchema), required=True, validate=validate.Length(min=1)
    )


class BulkResultSchema(Schema):
    successful = fields.Integer(dump_only=True)
    failed = fields.Integer(dump_only=True)
    errors = fields.List(fields.String(), dump_only=True)
