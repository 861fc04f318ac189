"""ETag helpers enabling optimistic concurrency for mutable resources."""

from __future__ import annotations

from typing import Any

from flask import Response, request


def resource_etag(resource: Any) -> str | None:
    """Return the ETag of a model (``compute_etag()``) or a DTO carrying ``etag``."""

    compute = getattr(resource, "compute_etag", None)
    if callable(compute):
        return compute()
    return getattr(resource, "etag", None)


def set_response_etag(response: Response, resource: Any) -> Response:
    """Attach a strong ``ETag`` header to a Flask response when possible."""

    value = resource_etag(resource)
    if value is not None:
        response.set_etag(value)
    return response


def if_match_header() -> str | None:
    """Return the raw ``If-Match`` value, or ``None`` when absent or ``*``."""

    value = request.headers.get("If-Match")
    if value is None or value.strip() == "*":
        return None
    return value.strip().removeprefix("W/")
