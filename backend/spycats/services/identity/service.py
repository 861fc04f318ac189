"""
IdentityService
===============

Staff accounts: sign-up, password checks and lookup. Issuing tokens is the
job of :class:`~spycats.services.auth.service.AuthService`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from spycats.models.user import User
from spycats.services._shared.base import BaseService
from spycats.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    violates,
)
from spycats.services._shared.policies.roles import Role
from spycats.services.identity.dto import UserAuthIn, UserPublicOut, UserRegisterIn

log = logging.getLogger(__name__)

#: (constraint name, column reported by SQLite) -> conflict code and message
_UNIQUE_COLUMNS = {
    "username": ("user_exists", "username already taken"),
    "email": ("email_exists", "email already in use"),
}


def _duplicate(column: str) -> ConflictError:
    code, message = _UNIQUE_COLUMNS[column]
    return ConflictError("User", message, code=code)


class IdentityService(BaseService):
    """Registration, authentication and retrieval of :class:`User` rows."""

    def register_user(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Create an account with the ``user`` role; elevated roles come from seeding.

        :raises ConflictError: ``user_exists`` or ``email_exists``.
        """
        with self.rw_uow() as uow:
            if uow.users.exists_by_username(dto.username):
                raise _duplicate("username")
            if uow.users.exists_by_email(dto.email):
                raise _duplicate("email")

            user = User(username=dto.username, email=dto.email, role=Role.USER)
            user.password = dto.password
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                # a concurrent sign-up won the race
                for column in _UNIQUE_COLUMNS:
                    if violates(exc, f"uq_users_{column}") or violates(exc, f"users.{column}"):
                        raise _duplicate(column) from exc
                raise

            log.info("user registered", extra={"user_id": user.id})
            return self._to_public(user)

    def authenticate(self, dto: UserAuthIn) -> UserPublicOut:
        """
        :raises InvalidCredentialsError: Unknown username or wrong password; the two
            cases are indistinguishable to the caller.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.username, dto.password)
            if user is None:
                raise InvalidCredentialsError()
            return self._to_public(user)

    def get_user(self, user_id: int) -> UserPublicOut:
        """:raises NotFoundError: ``user_not_found``."""
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_public(user)

    @staticmethod
    def _to_public(user: User) -> UserPublicOut:
        return UserPublicOut(
            id=user.id, username=user.username, email=user.email, role=Role(user.role)
        )
