"""Transaction scopes handed to services: one writer, one reader."""

from spycats.uow.base import UnitOfWork
from spycats.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyRepositoryContainer,
    SQLAlchemyUnitOfWork,
)

__all__ = [
    "SQLAlchemyReadOnlyUnitOfWork",
    "SQLAlchemyRepositoryContainer",
    "SQLAlchemyUnitOfWork",
    "UnitOfWork",
]
