"""Process-wide extension objects: database, migrations and the session-state cache."""

from __future__ import annotations

from pathlib import Path

from flask import Flask, current_app, has_app_context
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from spycats.services._shared.ports.cache import CacheStore

#: Deterministic constraint names so Alembic diffs stay stable across backends.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

db = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)


def init_app(app: Flask) -> None:
    """
    Bind the database and migrations, then open and ping the cache.

    The cache is stored in ``app.extensions["cache"]``.

    Raises
    ------
    RuntimeError
        If the cache does not answer a ping at startup.
    """
    from spycats import models  # noqa: F401  (registers the tables on db.metadata)
    from spycats.infra.cache_factory import create_cache

    db.init_app(app)
    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR))

    store = create_cache(app.config)
    if not store.ping():
        store.close()
        raise RuntimeError(f"Cache backend {app.config.get('CACHE_TYPE')!r} is not reachable")
    app.extensions["cache"] = store


def get_cache() -> CacheStore:
    """
    Cache of the active application.

    Raises
    ------
    RuntimeError
        Outside an application context, or before :func:`init_app` ran.
    """
    if not has_app_context():
        raise RuntimeError("get_cache() needs an active application context.")
    try:
        return current_app.extensions["cache"]
    except KeyError:
        raise RuntimeError("Cache is not initialized. Call init_app() first.") from None
