"""HTTP edge settings: trusted proxies and browser CORS for ``/api``."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

#: Headers a browser client needs for ETag concurrency and correlation.
EXPOSED_HEADERS = ("ETag", "Location", "X-Request-ID")
ALLOWED_HEADERS = ("Authorization", "Content-Type", "If-Match", "X-Request-ID")


def cors_origins(raw: str | None) -> list[str] | str:
    """Split ``CORS_ORIGINS``; blank or ``*`` means any origin."""
    origins = [origin.strip() for origin in (raw or "").split(",") if origin.strip()]
    return "*" if not origins or origins == ["*"] else origins


def init_app(app: Flask) -> None:
    """
    Trust ``PROXYFIX_HOPS`` reverse proxies (unless ``USE_PROXYFIX`` is off)
    and open the API prefix to the configured origins.

    Credentials are only allowed for an explicit origin list.
    """
    if app.config.get("USE_PROXYFIX", True):
        hops = int(app.config.get("PROXYFIX_HOPS", 1))
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops
        )

    origins = cors_origins(app.config.get("CORS_ORIGINS"))
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": origins}},
        supports_credentials=origins != "*",
        expose_headers=list(EXPOSED_HEADERS),
        allow_headers=list(ALLOWED_HEADERS),
        max_age=int(app.config.get("CORS_MAX_AGE", 600)),
    )
