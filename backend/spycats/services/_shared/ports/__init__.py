"""
spycats.services._shared.ports
==============================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`cache`:
    Defines :class:`~.CacheStore`, the TTL key-value store holding token
    session state, plus the value-encoding helpers shared by its adapters.

- :mod:`breeds`:
    Defines :class:`~.BreedValidator` and the in-memory
    :class:`~.StaticBreedValidator`.

Design Notes
------------
Concrete adapters (memory, Redis, HTTP catalog) live under ``spycats.infra``.
"""

from __future__ import annotations

from .breeds import BreedValidator, StaticBreedValidator
from .cache import NO_EXPIRATION_TTL, CacheStore, encode_value, ttl_seconds

__all__ = [
    "BreedValidator",
    "CacheStore",
    "NO_EXPIRATION_TTL",
    "StaticBreedValidator",
    "encode_value",
    "ttl_seconds",
]
