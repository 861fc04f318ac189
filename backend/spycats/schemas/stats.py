"""Dashboard statistics schema."""

from __future__ import annotations

from marshmallow import Schema, fields


class DashboardSchema(Schema):
    total_cats = fields.Integer(dump_only=True)
    average_salary = fields.Float(dump_only=True)
    total_missions = fields.Integer(dump_only=True)
    completed_missions = fields.Integer(dump_only=True)
    active_missions = fields.Integer(dump_only=True)
    total_targets = fields.Integer(dump_only=True)
    completed_targets = fields.Integer(dump_only=True)
