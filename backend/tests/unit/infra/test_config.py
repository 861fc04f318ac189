"""Unit tests for configuration helpers and the application factory wiring."""

from __future__ import annotations

import pytest
from spycats.core.config import (
    PLACEHOLDER_JWT_SECRET,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
    validate_config,
)
from spycats.factory import create_app
from spycats.infra.memory.memory_cache import MemoryCache


@pytest.mark.parametrize(
    ("raw", "expected"), [("1", True), ("yes", True), ("ON", True), ("0", False), ("nope", False)]
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SPYCATS_FLAG", raw)
    assert env_bool("SPYCATS_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SPYCATS_FLAG", raising=False)
    assert env_bool("SPYCATS_FLAG", True) is True


def test_env_int_rejects_garbage(monkeypatch):
    monkeypatch.setenv("SPYCATS_WORKERS", "five")
    with pytest.raises(ValueError):
        env_int("SPYCATS_WORKERS", 5)


def test_env_int_blank_uses_default(monkeypatch):
    monkeypatch.setenv("SPYCATS_WORKERS", "  ")
    assert env_int("SPYCATS_WORKERS", 5) == 5


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("testing", TestingConfig),
        ("PRODUCTION", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config(name, expected):
    assert get_config(name) is expected


def test_validate_config_refuses_placeholder_secret_in_production():
    with pytest.raises(RuntimeError):
        validate_config({"DEBUG": False, "TESTING": False, "JWT_SECRET": PLACEHOLDER_JWT_SECRET})


def test_validate_config_allows_placeholder_in_tests():
    validate_config({"TESTING": True, "JWT_SECRET": PLACEHOLDER_JWT_SECRET})


def test_testing_app_uses_memory_cache(app):
    assert isinstance(app.extensions["cache"], MemoryCache)
    assert app.config["BREED_VALIDATION_ENABLED"] is False


def test_unsupported_cache_type_fails_fast():
    class BrokenCacheConfig(TestingConfig):
        CACHE_TYPE = "memcached"

    with pytest.raises(ValueError):
        create_app(BrokenCacheConfig)
