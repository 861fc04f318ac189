# comments in English; reST docstrings
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from spycats.services._shared.errors import CacheBackendUnavailable, CacheKeyNotFound
from spycats.services._shared.ports.cache import CacheStore, Ttl, encode_value, ttl_seconds

log = logging.getLogger(__name__)


@contextmanager
def _backend_errors(op: str, key: str | None = None) -> Iterator[None]:
    """Re-raise any redis-py failure as :class:`CacheBackendUnavailable`."""
    try:
        yield
    except RedisError as exc:
        log.warning("redis %s failed for key=%s: %s", op, key, exc, extra={"backend": "redis"})
        raise CacheBackendUnavailable(f"redis {op} failed") from exc


class RedisCache(CacheStore):
    """
    Redis-backed :class:`CacheStore`.

    Expiration is delegated to Redis (``PX`` in milliseconds) so every process
    sharing the server observes the same TTLs.

    :param r: A Redis client (already configured).
    """

    def __init__(self, r: redis.Redis) -> None:
        self.r = r
        self._closed = False

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        password: str | None = None,
        db: int | None = None,
        socket_timeout: float | None = None,
    ) -> RedisCache:
        """
        Build a cache from a ``redis://`` URL.

        Explicit ``password``/``db`` override whatever the URL carries.

        :param url: Redis connection URL.
        :param password: Optional AUTH password.
        :param db: Optional logical database index.
        :param socket_timeout: Seconds before a socket operation times out.
        :returns: Unconnected cache (redis-py connects lazily).
        :rtype: RedisCache
        """
        kwargs: dict[str, Any] = {}
        if password:
            kwargs["password"] = password
        if db is not None:
            kwargs["db"] = db
        if socket_timeout is not None:
            kwargs["socket_timeout"] = socket_timeout
            kwargs["socket_connect_timeout"] = socket_timeout
        return cls(redis.Redis.from_url(url, **kwargs))

    # -------------------- helpers --------------------

    @staticmethod
    def _ttl_ms(ttl: Ttl) -> int:
        return max(1, int(ttl_seconds(ttl) * 1000))

    @staticmethod
    def _decode(raw: Any) -> str:
        if isinstance(raw, bytes | bytearray):
            return bytes(raw).decode("utf-8")
        return str(raw)

    def _ensure_open(self) -> None:
        if self._closed:
            raise CacheBackendUnavailable("redis cache is closed")

    # -------------------- API ------------------------

    def set(self, key: str, value: Any, ttl: Ttl = None) -> None:
        self._ensure_open()
        payload = encode_value(value)
        with _backend_errors("set", key):
            self.r.set(key, payload, px=self._ttl_ms(ttl))

    def get(self, key: str) -> str:
        self._ensure_open()
        with _backend_errors("get", key):
            raw = self.r.get(key)
        if raw is None:
            raise CacheKeyNotFound(key)
        return self._decode(raw)

    def delete(self, key: str) -> None:
        self._ensure_open()
        with _backend_errors("delete", key):
            self.r.delete(key)

    def exists(self, key: str) -> bool:
        self._ensure_open()
        with _backend_errors("exists", key):
            return cast(int, self.r.exists(key)) > 0

    def ping(self) -> bool:
        if self._closed:
            return False
        try:
            return bool(self.r.ping())
        except RedisError as exc:
            log.warning("redis ping failed: %s", exc, extra={"backend": "redis"})
            return False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        with _backend_errors("close"):
            self.r.close()
