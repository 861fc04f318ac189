"""Account lookups used by registration and login."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from spycats.models.user import User
from spycats.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Users are looked up by trimmed username or lower-cased email."""

    model = User
    writable = frozenset({"email", "role"})

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast("User | None", self.session.execute(stmt).scalars().first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        return self.session.execute(stmt.limit(1)).first() is not None

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        return self.session.execute(stmt.limit(1)).first() is not None

    def authenticate(self, username: str, password: str) -> User | None:
        """Return the user only when ``password`` matches the stored hash."""
        user = self.get_by_username(username)
        if user is None or not user.verify_password(password):
            return None
        return user
