"""Factory Boy definition for :class:`spycats.models.user.User`."""

from __future__ import annotations

import factory
from spycats.models.user import User

from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """Build persisted :class:`spycats.models.user.User` instances."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"agent{n}@spycats.com")
    username = factory.Sequence(lambda n: f"agent{n}")
    role = "user"
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or "Passw0rd!"
