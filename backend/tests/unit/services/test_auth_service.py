"""Unit tests for AuthService: sign-up, sign-in, rotation, logout and request guard."""

from __future__ import annotations

import pytest
from spycats.infra.memory.memory_cache import MemoryCache
from spycats.services._shared.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    RefreshMismatchError,
    RefreshNotFoundError,
    RevokedTokenError,
)
from spycats.services._shared.policies.roles import Role
from spycats.services.auth.service import AuthService
from spycats.services.identity.dto import UserAuthIn, UserRegisterIn
from spycats.services.tokens import TokenConfig, TokenService

from tests.factories.user import UserFactory


@pytest.fixture()
def tokens():
    cache = MemoryCache(sweep_interval=None)
    yield TokenService(cache, TokenConfig(secret="auth-service-secret-of-32-bytes-or-more"))
    cache.close()


@pytest.fixture()
def service(session, tokens) -> AuthService:
    return AuthService(tokens=tokens)


def test_register_issues_tokens_for_new_user(service, tokens):
    out = service.register(
        UserRegisterIn(username="ivan", email="ivan@spycats.com", password="password1")
    )

    claims = tokens.validate_token(out.tokens.access_token)
    assert claims.user_id == out.user.id
    assert claims.username == "ivan"
    assert claims.role is Role.USER


def test_login_embeds_stored_role(service, tokens, create):
    create(UserFactory, username="chief", password="topsecret", role=Role.ADMIN.value)

    out = service.login(UserAuthIn(username="chief", password="topsecret"))

    assert tokens.validate_token(out.tokens.access_token).role is Role.ADMIN


def test_login_with_wrong_password_fails(service, create):
    create(UserFactory, username="chief", password="topsecret")

    with pytest.raises(InvalidCredentialsError):
        service.login(UserAuthIn(username="chief", password="guess"))


def test_relogin_supersedes_previous_refresh_token(service, create):
    create(UserFactory, username="chief", password="topsecret")
    first = service.login(UserAuthIn(username="chief", password="topsecret"))
    service.login(UserAuthIn(username="chief", password="topsecret"))

    with pytest.raises(RefreshMismatchError):
        service.refresh(first.tokens.refresh_token)


def test_logout_revokes_refresh_and_blacklists_access(service, create):
    user = create(UserFactory, username="chief", password="topsecret")
    auth = service.login(UserAuthIn(username="chief", password="topsecret"))

    service.logout(user.id, auth.tokens.access_token)

    with pytest.raises(RefreshNotFoundError):
        service.refresh(auth.tokens.refresh_token)
    with pytest.raises(RevokedTokenError):
        service.authenticate_request(auth.tokens.access_token)


def test_authenticate_request_checks_blacklist_even_for_valid_signature(service, tokens):
    pair = tokens.generate_token_pair(7, "ghost", Role.USER)
    tokens.blacklist_token(pair.access_token)

    assert tokens.validate_token(pair.access_token).user_id == 7
    with pytest.raises(RevokedTokenError):
        service.authenticate_request(pair.access_token)


def test_authenticate_request_rejects_refresh_tokens(service, tokens):
    pair = tokens.generate_token_pair(7, "ghost", Role.USER)

    with pytest.raises(InvalidTokenError):
        service.authenticate_request(pair.refresh_token)


def test_me_returns_public_profile(service, create):
    user = create(UserFactory, username="chief", email="chief@spycats.com")

    out = service.me(user.id)

    assert (out.username, out.email) == ("chief", "chief@spycats.com")
