"""Inputs and outputs of :class:`~spycats.services.identity.service.IdentityService`."""

from __future__ import annotations

from dataclasses import dataclass

from spycats.services._shared.policies.roles import Role


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """Self-service sign-up; the password arrives in clear and is hashed by the model."""

    username: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    username: str
    password: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    What the API may reveal about an account.

    :param role: Drives every authorization decision and is copied into tokens.
    :type role: Role
    """

    id: int
    username: str
    email: str
    role: Role
