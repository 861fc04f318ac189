"""Unit tests for IdentityService."""

from __future__ import annotations

import pytest
from spycats.services._shared.errors import ConflictError, InvalidCredentialsError, NotFoundError
from spycats.services._shared.policies.roles import Role
from spycats.services.identity.dto import UserAuthIn, UserRegisterIn
from spycats.services.identity.service import IdentityService

from tests.factories.user import UserFactory


@pytest.fixture()
def service(session) -> IdentityService:
    return IdentityService()


def test_register_user_defaults_to_user_role(service):
    out = service.register_user(
        UserRegisterIn(username="natasha", email="Natasha@SpyCats.com", password="s3cret!")
    )

    assert out.id is not None
    assert out.role is Role.USER
    assert out.email == "natasha@spycats.com"


def test_register_rejects_duplicate_username(service, create):
    create(UserFactory, username="boris", email="boris@spycats.com")

    with pytest.raises(ConflictError) as err:
        service.register_user(
            UserRegisterIn(username="boris", email="other@spycats.com", password="s3cret!")
        )
    assert err.value.code == "user_exists"


def test_register_rejects_duplicate_email(service, create):
    create(UserFactory, username="boris", email="boris@spycats.com")

    with pytest.raises(ConflictError) as err:
        service.register_user(
            UserRegisterIn(username="someone", email="BORIS@spycats.com", password="s3cret!")
        )
    assert err.value.code == "email_exists"


def test_authenticate_accepts_valid_credentials(service, create):
    user = create(UserFactory, username="felix", password="meow-meow")

    out = service.authenticate(UserAuthIn(username="felix", password="meow-meow"))

    assert out.id == user.id
    assert out.username == "felix"


@pytest.mark.parametrize(
    ("username", "password"),
    [("felix", "wrong-password"), ("nobody", "meow-meow")],
)
def test_authenticate_rejects_bad_credentials(service, create, username, password):
    create(UserFactory, username="felix", password="meow-meow")

    with pytest.raises(InvalidCredentialsError):
        service.authenticate(UserAuthIn(username=username, password=password))


def test_get_user_missing_raises(service):
    with pytest.raises(NotFoundError) as err:
        service.get_user(404)
    assert err.value.code == "user_not_found"
