"""Pytest fixtures building an isolated application per test.

Every test gets its own Flask app with a fresh in-memory SQLite database and
an in-memory session cache, so no state leaks between cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from spycats.core.extensions import db as _db
from spycats.factory import create_app
from spycats.repositories.base import BaseRepository
from spycats.services._shared.policies.roles import Role
from spycats.services.tokens import TokenService

from tests.factories import FactorySession


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with ``TestingConfig`` applied and the schema created.
    """
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("TEST_DATABASE_URL", None)
    application = create_app("testing")
    application.logger.setLevel("WARNING")
    with application.app_context():
        _db.create_all()
    yield application
    with application.app_context():
        _db.session.remove()
        _db.drop_all()
    application.extensions["cache"].close()


@pytest.fixture()
def db(app: Flask) -> Generator[Any, None, None]:
    """Push an application context and expose the database extension."""
    with app.app_context():
        yield _db


@pytest.fixture()
def session(db: Any) -> Generator[Any, None, None]:
    """Provide the app-scoped session and wire Factory Boy to it."""
    FactorySession.bind(db.session)
    yield db.session
    db.session.rollback()
    FactorySession.bind(None)


@pytest.fixture()
def create(session: Any) -> Callable[..., Any]:
    """Build rows through a factory and commit them on the test session.

    Service tests use this so that a unit of work rolling back on error does
    not discard the fixture data.
    """

    def _create(factory: Any, **kwargs: Any) -> Any:
        obj = factory(**kwargs)
        session.commit()
        return obj

    return _create


@pytest.fixture()
def locked_rows(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, Any]]:
    """Record ``(model name, id)`` for every ``get_for_update`` call.

    SQLite drops ``FOR UPDATE``, so tests assert on the repository call instead.
    """
    calls: list[tuple[str, Any]] = []
    original = BaseRepository.get_for_update

    def _recording(self: BaseRepository, entity_id: Any) -> Any:
        calls.append((self.model.__name__, entity_id))
        return original(self, entity_id)

    monkeypatch.setattr(BaseRepository, "get_for_update", _recording)
    return calls


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def persist(app: Flask) -> Callable[..., Any]:
    """Create rows through a factory in a short-lived app context and commit them.

    API tests use this so that requests, which run in their own app context,
    see the data.

    Examples
    --------
    >>> cat_id = persist(CatFactory, name="Tom").id
    """

    def _persist(factory: Any, **kwargs: Any) -> Any:
        with app.app_context():
            FactorySession.bind(_db.session)
            try:
                obj = factory(**kwargs)
                _db.session.commit()
                _db.session.refresh(obj)
            finally:
                FactorySession.bind(None)
        return obj

    return _persist


@pytest.fixture()
def token_service(app: Flask) -> TokenService:
    """Token service bound to the test app's cache and config."""
    with app.app_context():
        from spycats.api.deps import token_service as provider

        return provider()


@pytest.fixture()
def auth_headers(persist: Callable[..., Any], token_service: TokenService) -> Callable[..., dict]:
    """Factory returning ``Authorization`` headers for a freshly persisted user.

    Examples
    --------
    >>> headers = auth_headers(Role.ADMIN)
    """
    from tests.factories.user import UserFactory

    def _headers(role: Role = Role.USER) -> dict[str, str]:
        user = persist(UserFactory, role=role.value)
        pair = token_service.generate_token_pair(user.id, user.username, role)
        return {"Authorization": f"Bearer {pair.access_token}"}

    return _headers


@pytest.fixture()
def admin_headers(auth_headers: Callable[..., dict]) -> dict[str, str]:
    return auth_headers(Role.ADMIN)


@pytest.fixture()
def manager_headers(auth_headers: Callable[..., dict]) -> dict[str, str]:
    return auth_headers(Role.MANAGER)


@pytest.fixture()
def user_headers(auth_headers: Callable[..., dict]) -> dict[str, str]:
    return auth_headers(Role.USER)
