"""factory_boy bases bound to the per-test SQLAlchemy session."""

from __future__ import annotations

import factory


class FactorySession:
    """Holds the session the ``session`` fixture hands to factories."""

    current = None

    @classmethod
    def bind(cls, session) -> None:
        cls.current = session

    @classmethod
    def get(cls):
        if cls.current is None:
            raise RuntimeError("No session bound; request the 'session' or 'persist' fixture.")
        return cls.current


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_factory = FactorySession.get
        sqlalchemy_session_persistence = "flush"
