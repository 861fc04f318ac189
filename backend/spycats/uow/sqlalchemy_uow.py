"""
Units of work over the Flask-SQLAlchemy session.

:class:`SQLAlchemyUnitOfWork` commits when its block succeeds.
:class:`SQLAlchemyReadOnlyUnitOfWork` never commits and refuses writes while
it is open.
"""

from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from spycats.core.extensions import db
from spycats.repositories import (
    CatRepository,
    MissionRepository,
    TargetRepository,
    UserRepository,
)
from spycats.uow.base import UnitOfWork

#: Leading SQL keywords treated as writes by the read-only guard.
WRITE_KEYWORDS = frozenset(
    {"insert", "update", "delete", "merge", "replace", "create", "alter", "drop", "truncate"}
)


class SQLAlchemyRepositoryContainer:
    """Repositories sharing one session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.cats = CatRepository(session=session)
        self.missions = MissionRepository(session=session)
        self.targets = TargetRepository(session=session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """Read-write scope: commit on a clean exit, roll back otherwise."""

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def _close(self, *, failed: bool) -> None:
        if failed:
            self.rollback()
            return
        try:
            self.commit()
        except SQLAlchemyError:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class _WriteGuard:
    """Event listeners that make a session and its connection reject writes."""

    def __init__(self, session: Session, connection: Connection) -> None:
        self.session = session
        self.connection = connection
        self.installed = False

    def _on_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only unit of work: flush blocked")

    def _on_execute(self, conn, cursor, statement, parameters, context, executemany) -> None:
        words = (statement or "").split(None, 1)
        keyword = words[0].lower() if words else ""
        if keyword in WRITE_KEYWORDS:
            raise RuntimeError(f"Read-only unit of work: SQL statement blocked ({keyword.upper()})")

    def install(self) -> None:
        event.listen(self.session, "before_flush", self._on_flush)
        event.listen(self.connection, "before_cursor_execute", self._on_execute)
        self.installed = True

    def remove(self) -> None:
        if not self.installed:
            return
        event.remove(self.session, "before_flush", self._on_flush)
        event.remove(self.connection, "before_cursor_execute", self._on_execute)
        self.installed = False


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only scope for queries.

    When no transaction is open yet the scope begins its own and rolls it
    back on exit; on PostgreSQL it is also marked ``READ ONLY``. When the
    session already has a transaction the scope joins it and leaves it open.
    Either way ORM flushes and DML statements raise ``RuntimeError`` until the
    block ends.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._owned: SessionTransaction | None = None
        self._guard: _WriteGuard | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._owned = self.session.begin()
        except InvalidRequestError:
            self._owned = None

        connection = self.session.connection()
        self._guard = _WriteGuard(self.session, connection)
        self._guard.install()

        if self._owned is not None and connection.dialect.name == "postgresql":
            try:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                current_app.logger.warning("SET TRANSACTION READ ONLY failed: %s", exc)
        return self

    def _close(self, *, failed: bool) -> None:
        try:
            if self._owned is not None:
                self._owned.rollback()
        finally:
            self._owned = None
            if self._guard is not None:
                self._guard.remove()
                self._guard = None

    def commit(self) -> None:
        raise RuntimeError("Read-only unit of work cannot commit")

    def rollback(self) -> None:
        self.session.rollback()
