"""Version 1 of the spy-cats API."""

from __future__ import annotations

from flask import Blueprint

from spycats.api.v1.auth import bp as auth_bp
from spycats.api.v1.bulk import bp as bulk_bp
from spycats.api.v1.cats import bp as cats_bp
from spycats.api.v1.health import bp as health_bp
from spycats.api.v1.missions import bp as missions_bp
from spycats.api.v1.stats import bp as stats_bp
from spycats.api.v1.targets import bp as targets_bp

API_VERSION = "v1"

#: ``(blueprint, prefix relative to /api/v1)``; targets nest under missions.
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (cats_bp, "/cats"),
    (missions_bp, "/missions"),
    (targets_bp, "/missions"),
    (stats_bp, "/stats"),
    (bulk_bp, "/bulk"),
]
