"""HTTP surface: versioned blueprint bundles mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """``join_prefix("/api/", "v1", "/cats")`` -> ``"/api/v1/cats"``."""
    return "/" + "/".join(part.strip("/") for part in segments if part.strip("/"))


def mount(app: Flask, version_prefix: str, registry: Iterable[tuple[Blueprint, str]]) -> None:
    """Register each ``(blueprint, relative_prefix)`` below ``version_prefix``."""
    for blueprint, relative in registry:
        app.register_blueprint(blueprint, url_prefix=join_prefix(version_prefix, relative))


def init_app(app: Flask) -> None:
    from spycats.api.v1 import API_VERSION, REGISTRY

    mount(app, join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION), REGISTRY)


__all__ = ["init_app", "join_prefix", "mount"]
