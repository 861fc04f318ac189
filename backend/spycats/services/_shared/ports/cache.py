"""
Key-value cache port used as the session-state store.

Values are persisted as text: strings verbatim, numbers stringified, anything
else JSON-encoded. Every operation either succeeds or raises a
:class:`~spycats.services._shared.errors.CacheError` subclass.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any, Final, Protocol

from spycats.services._shared.errors import CacheSerializationError

#: Effective TTL for "no expiration" requests (``ttl`` missing or ``<= 0``).
NO_EXPIRATION_TTL: Final[float] = 365 * 24 * 60 * 60.0

Ttl = int | float | timedelta | None


def ttl_seconds(ttl: Ttl) -> float:
    """
    Normalize a TTL argument to a strictly positive number of seconds.

    :param ttl: Seconds, a :class:`~datetime.timedelta`, or ``None``.
    :returns: Seconds; one year when ``ttl`` is missing or non-positive.
    :rtype: float
    """
    if ttl is None:
        return NO_EXPIRATION_TTL
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    return seconds if seconds > 0 else NO_EXPIRATION_TTL


def encode_value(value: Any) -> str:
    """
    Convert a scalar or JSON-serializable value to its stored text form.

    :param value: Value to store.
    :returns: Text representation.
    :raises CacheSerializationError: If the value cannot be encoded.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CacheSerializationError("bytes value is not valid UTF-8") from exc
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, int | float):
        return str(value)
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        kind = type(value).__name__
        raise CacheSerializationError(f"value of type {kind} is not serializable") from exc


class CacheStore(Protocol):
    """
    Abstraction for a TTL key-value store.

    Implementations MUST be safe for concurrent use from many request threads.
    ``get`` raises :class:`CacheKeyNotFound` for absent or expired keys;
    callers treat that as a normal outcome.
    """

    def set(self, key: str, value: Any, ttl: Ttl = None) -> None: ...

    def get(self, key: str) -> str: ...

    def delete(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...

    def ping(self) -> bool: ...

    def close(self) -> None: ...

    def set_json(self, key: str, value: Any, ttl: Ttl = None) -> None:
        """Store ``value`` JSON-encoded, whatever its type."""
        try:
            payload = json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise CacheSerializationError(f"value for {key!r} is not JSON serializable") from exc
        self.set(key, payload, ttl)

    def get_json(self, key: str) -> Any:
        """Return the decoded JSON document stored under ``key``."""
        raw = self.get(key)
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise CacheSerializationError(f"value for {key!r} is not valid JSON") from exc
