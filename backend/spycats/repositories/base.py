"""Thin SQLAlchemy repositories shared by the cat, mission and user stores.

A repository stages rows and runs queries against the session it was handed.
It never commits: the unit of work that owns the session decides when the
transaction ends.

Subclasses describe themselves with three class-level maps:

``sort_columns``
    public sort key -> column; unknown keys in a sort request are ignored.
``filter_columns``
    public filter key -> column; only equality filters are supported.
``writable``
    attribute names :meth:`BaseRepository.update` may assign.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from spycats.core.extensions import db

E = TypeVar("E")


@dataclass(slots=True)
class Pagination:
    """Page request: 1-based ``page``, ``limit`` rows and public ``sort`` tokens."""

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    """One slice of a listing plus the unsliced row count."""

    items: Sequence[E]
    total: int
    page: int
    limit: int


def order_clauses(tokens: Iterable[str], columns: Mapping[str, Any]) -> list[Any]:
    """Turn tokens such as ``["-salary", "name"]`` into ``ORDER BY`` clauses.

    :param tokens: Public sort keys, ``-`` prefix meaning descending.
    :param columns: Whitelist of sortable columns.
    :returns: Clauses for the known keys, in request order.
    """
    clauses: list[Any] = []
    for raw in tokens:
        token = raw.strip()
        descending = token.startswith("-")
        column = columns.get(token.lstrip("-").strip())
        if column is None:
            continue
        clauses.append(column.desc() if descending else column.asc())
    return clauses


def paginate_select(
    session: Session, stmt: Select[Any], *, page: int, limit: int
) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and count every row it would return.

    ``page`` and ``limit`` are clamped to at least 1.
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    counter = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(counter).scalar_one())
    rows = session.execute(stmt.limit(limit).offset((page - 1) * limit)).scalars().all()
    return list(rows), total


class BaseRepository(Generic[E]):
    """Session-bound access to one mapped model."""

    model: ClassVar[type[Any]]
    sort_columns: ClassVar[Mapping[str, Any]] = {}
    filter_columns: ClassVar[Mapping[str, Any]] = {}
    writable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """Injected session, or the Flask-scoped one when none was given."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _select(self) -> Select[Any]:
        """Base statement for lookups and listings; override to add loader options."""
        return select(self.model)

    def _by_id(self, entity_id: Any) -> Select[Any]:
        return self._select().where(self.model.id == entity_id)

    def _filtered(self, stmt: Select[Any], filters: Mapping[str, Any] | None) -> Select[Any]:
        for key, value in (filters or {}).items():
            column = self.filter_columns.get(key)
            if column is not None:
                stmt = stmt.where(column == value)
        return stmt

    # ------------------------------- Writes -------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        """Assign ``fields`` through the model's validators and flush.

        :raises ValueError: If a field is not in ``writable``.
        """
        rejected = sorted(set(fields) - self.writable)
        if rejected:
            raise ValueError(f"{type(self).__name__} cannot write {rejected}")
        for name, value in fields.items():
            setattr(instance, name, value)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ------------------------------- Reads --------------------------------

    def get(self, entity_id: Any) -> E | None:
        return cast("E | None", self.session.execute(self._by_id(entity_id)).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get`, locking the row where the backend supports it."""
        stmt = self._by_id(entity_id).with_for_update()
        return cast("E | None", self.session.execute(stmt).scalars().first())

    def paginate(
        self, pagination: Pagination, *, filters: Mapping[str, Any] | None = None
    ) -> Page[E]:
        """List one page, ordered by the requested keys then by id."""
        stmt = self._filtered(self._select(), filters)
        stmt = stmt.order_by(
            *order_clauses(pagination.sort, self.sort_columns), self.model.id.asc()
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)
