"""Select a :class:`CacheStore` implementation from configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from spycats.core.config import SUPPORTED_CACHE_TYPES
from spycats.infra.memory.memory_cache import MemoryCache
from spycats.infra.redis.redis_cache import RedisCache
from spycats.services._shared.ports.cache import CacheStore

log = logging.getLogger(__name__)


def create_cache(config: Mapping[str, Any]) -> CacheStore:
    """
    Build the cache backend named by ``CACHE_TYPE``.

    Parameters
    ----------
    config : Mapping[str, Any]
        Usually ``app.config``. Reads ``CACHE_TYPE``, ``CACHE_SWEEP_INTERVAL``
        and the ``REDIS_*`` keys.

    Returns
    -------
    CacheStore
        A ready-to-use backend. Redis connects lazily; callers should ``ping``.

    Raises
    ------
    ValueError
        If ``CACHE_TYPE`` names an unsupported backend.
    """
    cache_type = str(config.get("CACHE_TYPE") or "memory").strip().lower()

    if cache_type == "memory":
        log.info("cache backend selected", extra={"backend": "memory"})
        return MemoryCache(sweep_interval=config.get("CACHE_SWEEP_INTERVAL"))

    if cache_type == "redis":
        log.info("cache backend selected", extra={"backend": "redis"})
        return RedisCache.from_url(
            config.get("REDIS_URL") or "redis://localhost:6379/0",
            password=config.get("REDIS_PASSWORD") or None,
            db=config.get("REDIS_DB"),
            socket_timeout=config.get("REDIS_SOCKET_TIMEOUT"),
        )

    expected = ", ".join(sorted(SUPPORTED_CACHE_TYPES))
    raise ValueError(f"Unsupported CACHE_TYPE {cache_type!r}; expected one of {expected}")
