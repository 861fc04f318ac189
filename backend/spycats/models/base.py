"""Column mixins for the agency tables (SQLAlchemy 2.0 typed mappings)."""

from __future__ import annotations

import hashlib
from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class Entity:
    """
    Surrogate ``id`` plus database-maintained ``created_at``/``updated_at``.

    Attributes
    ----------
    id:
        Integer primary key.
    created_at, updated_at:
        Timezone-aware timestamps set by the database server.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class ETagMixin:
    """
    Strong validator for ``If-Match`` checks.

    The digest covers ``id``, ``updated_at`` and every attribute named in
    ``__etag_fields__``. Mutable columns must be listed there because
    ``updated_at`` only has one-second resolution on SQLite.
    """

    __etag_fields__: tuple[str, ...] = ()

    def compute_etag(self) -> str:
        """SHA-256 hex digest of the fingerprinted state."""
        stamp = getattr(self, "updated_at", None)
        parts = [getattr(self, "id", ""), stamp.isoformat() if stamp else ""]
        parts += [getattr(self, name, "") for name in self.__etag_fields__]
        return hashlib.sha256(":".join(map(str, parts)).encode()).hexdigest()
