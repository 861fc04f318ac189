"""Agency staff accounts."""

from __future__ import annotations

from typing import NoReturn

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from spycats.core.extensions import db
from spycats.services._shared.policies.roles import Role

from .base import Entity


class User(Entity, db.Model):
    """
    Login identity and role of a staff member.

    ``username`` is stored trimmed and ``email`` trimmed and lower-cased, both
    unique. The plain password is write-only: assigning ``user.password``
    stores a werkzeug hash in ``password_hash``.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.USER.value, server_default=Role.USER.value
    )

    @property
    def password(self) -> NoReturn:
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """``True`` when ``raw`` matches the stored hash."""
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw)

    @validates("username")
    def _clean_username(self, key: str, value: str) -> str:
        cleaned = value.strip() if isinstance(value, str) else ""
        if not cleaned:
            raise ValueError("Username is required.")
        return cleaned

    @validates("email")
    def _clean_email(self, key: str, value: str) -> str:
        """Lower-case and trim; full address validation happens in the API schema."""
        cleaned = value.strip().lower() if isinstance(value, str) else ""
        local, _, domain = cleaned.partition("@")
        if not local or "." not in domain:
            raise ValueError("Email format looks invalid.")
        return cleaned

    @validates("role")
    def _check_role(self, key: str, value: str | Role) -> str:
        try:
            return Role(value).value
        except ValueError as exc:
            raise ValueError(f"Unknown role: {value!r}") from exc
