"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class QuerySchema(Schema):
    """Base for query-string schemas; unknown arguments are ignored."""

    class Meta:
        unknown = EXCLUDE


class PaginationQuerySchema(QuerySchema):
    """
    Validate ``page``, ``limit`` and comma-separated ``sort`` arguments.

    ``limit`` falls back to ``default_limit`` and is clamped to ``max_limit``.
    """

    def __init__(self, *, default_limit: int = 20, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))
    sort = fields.String(load_default="")

    @post_load
    def normalize(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("sort") or ""
        data["sort"] = [token.strip() for token in raw.split(",") if token.strip()]
        data["limit"] = min(data.get("limit", self._default_limit), self._max_limit)
        return data


class MetaSchema(Schema):
    """Metadata block for paginated responses."""

    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    has_prev = fields.Boolean()
    has_next = fields.Boolean()


class NonBlankString(fields.String):
    """String field that strips surrounding whitespace and rejects blank values."""

    default_error_messages = {"blank": "Field may not be blank."}

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> str:
        text = super()._deserialize(value, attr, data, **kwargs).strip()
        if not text:
            raise self.make_error("blank")
        return text
