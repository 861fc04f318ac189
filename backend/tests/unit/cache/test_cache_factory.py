"""Unit tests for cache backend selection and per-app lookup."""

from __future__ import annotations

import pytest
from spycats.core.extensions import get_cache
from spycats.factory import create_app
from spycats.infra.cache_factory import create_cache
from spycats.infra.memory.memory_cache import MemoryCache
from spycats.infra.redis.redis_cache import RedisCache


def test_memory_backend_selected():
    cache = create_cache({"CACHE_TYPE": "memory", "CACHE_SWEEP_INTERVAL": 0})
    try:
        assert isinstance(cache, MemoryCache)
        assert cache.ping() is True
    finally:
        cache.close()


def test_cache_type_is_case_insensitive():
    cache = create_cache({"CACHE_TYPE": " Memory "})
    try:
        assert isinstance(cache, MemoryCache)
    finally:
        cache.close()


def test_redis_backend_built_from_url():
    cache = create_cache(
        {
            "CACHE_TYPE": "redis",
            "REDIS_URL": "redis://cache.internal:6380",
            "REDIS_DB": 3,
            "REDIS_SOCKET_TIMEOUT": 1.5,
        }
    )
    assert isinstance(cache, RedisCache)
    kwargs = cache.r.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.internal"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 3
    assert kwargs["socket_timeout"] == 1.5


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="memcached"):
        create_cache({"CACHE_TYPE": "memcached"})


def test_get_cache_returns_the_active_apps_store(app):
    with app.app_context():
        assert get_cache() is app.extensions["cache"]


def test_each_app_keeps_its_own_cache(app):
    other = create_app("testing")
    try:
        with other.app_context():
            assert get_cache() is other.extensions["cache"]
        with app.app_context():
            assert get_cache() is not other.extensions["cache"]
    finally:
        other.extensions["cache"].close()


def test_get_cache_requires_app_context(app):
    with pytest.raises(RuntimeError, match="application context"):
        get_cache()
