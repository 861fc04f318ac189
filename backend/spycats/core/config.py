"""
Settings for the spy-cats API.

One class per deployment environment. Values come from the process
environment (and a ``.env`` file when present), so a container can be
retargeted without code changes. ``APP_ENV`` picks the class.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import Final, TypeVar

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"

PLACEHOLDER_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"

SUPPORTED_CACHE_TYPES: Final[frozenset[str]] = frozenset({"redis", "memory"})

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

N = TypeVar("N", int, float)

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) are true, other values false."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_number(name: str, default: N, parse: Callable[[str], N], kind: str) -> N:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be {kind}, got {raw!r}") from exc


def env_int(name: str, default: int) -> int:
    """
    Read an integer setting.

    Parameters
    ----------
    name: str
        Environment variable.
    default: int
        Used when the variable is unset or blank.

    Raises
    ------
    ValueError
        If the variable holds something other than an integer.
    """
    return _env_number(name, default, int, "an integer")


def env_float(name: str, default: float) -> float:
    """Read a float setting; same rules as :func:`env_int`."""
    return _env_number(name, default, float, "a number")


class BaseConfig:
    """
    Settings shared by every environment.

    Attributes
    ----------
    APP_NAME: str
        Service name, also the ``iss`` claim of every token.
    APP_VERSION: str
        Reported by ``GET /api/v1/health``.
    JWT_SECRET, JWT_SIGNING_ALGORITHM:
        HMAC key and algorithm (``HS256``, ``HS384``, ``HS512``) for tokens.
    JWT_ACCESS_TOKEN_TTL, JWT_REFRESH_TOKEN_TTL: int
        Token lifetimes in seconds (15 minutes and 7 days by default).
    CACHE_TYPE: str
        ``"redis"`` or ``"memory"``; holds refresh records and the blacklist.
    REDIS_URL, REDIS_PASSWORD, REDIS_DB, REDIS_SOCKET_TIMEOUT:
        Redis connection settings.
    CACHE_SWEEP_INTERVAL: float
        Seconds between memory-cache expiry sweeps; ``<= 0`` disables the sweeper.
    BREED_API_URL, BREED_CACHE_TTL, BREED_API_TIMEOUT, BREED_VALIDATION_ENABLED:
        Breed catalog source, refresh period, HTTP timeout and kill switch.
    BULK_MAX_WORKERS: int
        Thread pool size for bulk salary updates and hiring.
    LOG_LEVEL, LOG_FORMAT: str
        Root log level and ``json`` or ``text`` output.
    CORS_ORIGINS, CORS_MAX_AGE:
        Comma-separated browser origins allowed to call the API, preflight cache.
    USE_PROXYFIX, PROXYFIX_HOPS:
        Whether and how many ``X-Forwarded-*`` hops to trust.
    """

    API_BASE_PREFIX = "/api"
    APP_NAME = os.getenv("APP_NAME", "spy-cats-api")
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    APP_COMMIT = os.getenv("APP_COMMIT", "unknown")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET = os.getenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET)
    JWT_SIGNING_ALGORITHM = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_TTL = env_int("JWT_ACCESS_TOKEN_TTL", 15 * 60)
    JWT_REFRESH_TOKEN_TTL = env_int("JWT_REFRESH_TOKEN_TTL", 7 * 24 * 3600)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./spycats.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    CACHE_TYPE = os.getenv("CACHE_TYPE", "redis")
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
    REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None
    REDIS_DB = env_int("REDIS_DB", 0)
    REDIS_SOCKET_TIMEOUT = env_float("REDIS_SOCKET_TIMEOUT", 2.0)
    CACHE_SWEEP_INTERVAL = env_float("CACHE_SWEEP_INTERVAL", 60.0)

    BREED_API_URL = os.getenv("BREED_API_URL", "https://api.thecatapi.com/v1/breeds")
    BREED_CACHE_TTL = env_float("BREED_CACHE_TTL", 600.0)
    BREED_API_TIMEOUT = env_float("BREED_API_TIMEOUT", 5.0)
    BREED_VALIDATION_ENABLED = env_bool("BREED_VALIDATION_ENABLED", True)

    BULK_MAX_WORKERS = env_int("BULK_MAX_WORKERS", 5)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, memory cache unless ``CACHE_TYPE`` says otherwise."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CACHE_TYPE = os.getenv("CACHE_TYPE", "memory")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "text")


class TestingConfig(BaseConfig):
    """
    Test runs.

    In-memory SQLite (or ``TEST_DATABASE_URL``), a memory cache without a
    sweeper, any breed accepted and bulk work done inline.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PROPAGATE_EXCEPTIONS = True
    JWT_SECRET = "test-secret-key-with-at-least-32-bytes!"
    CACHE_TYPE = "memory"
    CACHE_SWEEP_INTERVAL = 0.0
    BREED_VALIDATION_ENABLED = False
    BULK_MAX_WORKERS = 1
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Deployed runs; :func:`validate_config` requires a real ``JWT_SECRET``."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None = None) -> type[BaseConfig]:
    """
    Config class for ``name``, or for ``APP_ENV`` when ``name`` is ``None``.

    Unknown names select :class:`DevelopmentConfig`.
    """
    selected = (name or os.getenv(ENV_VAR) or "development").strip().lower()
    return CONFIG_MAP.get(selected, DevelopmentConfig)


def validate_config(config: Mapping[str, object]) -> None:
    """
    Fail fast on settings the app cannot run with.

    Raises
    ------
    ValueError
        ``CACHE_TYPE`` names an unsupported backend or ``BULK_MAX_WORKERS < 1``.
    RuntimeError
        Outside debug and tests, ``JWT_SECRET`` is missing or the placeholder.
    """
    cache_type = str(config.get("CACHE_TYPE", "memory")).strip().lower()
    if cache_type not in SUPPORTED_CACHE_TYPES:
        raise ValueError(
            f"CACHE_TYPE must be one of {sorted(SUPPORTED_CACHE_TYPES)}, got {cache_type!r}"
        )
    if int(config.get("BULK_MAX_WORKERS", 1)) < 1:  # type: ignore[call-overload]
        raise ValueError("BULK_MAX_WORKERS must be at least 1")

    if config.get("DEBUG") or config.get("TESTING"):
        return
    if config.get("JWT_SECRET") in (None, "", PLACEHOLDER_JWT_SECRET):
        raise RuntimeError("JWT_SECRET must be configured for production deployments.")
