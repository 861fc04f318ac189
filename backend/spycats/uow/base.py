"""Transaction scope contract shared by the writer and reader units of work."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spycats.repositories import (
        CatRepository,
        MissionRepository,
        TargetRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    One use-case's view of the database.

    Every repository attribute is bound to the same transaction. Leaving the
    ``with`` block ends that transaction through :meth:`_close`.
    """

    users: UserRepository
    cats: CatRepository
    missions: MissionRepository
    targets: TargetRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._close(failed=exc_type is not None)

    @abstractmethod
    def _close(self, *, failed: bool) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
