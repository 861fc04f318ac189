"""In-process TTL cache with a read-write lock and a background sweeper."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from spycats.services._shared.errors import CacheBackendUnavailable, CacheKeyNotFound
from spycats.services._shared.ports.cache import CacheStore, Ttl, encode_value, ttl_seconds

log = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 60.0


class ReadWriteLock:
    """
    Many concurrent readers, one writer at a time.

    Waiting writers block new readers so a steady read load cannot starve
    them.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True, slots=True)
class _Entry:
    value: str
    expires_at: float

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryCache(CacheStore):
    """
    Dict-backed :class:`CacheStore`.

    Expired keys are purged lazily when touched by ``get``/``exists`` and
    periodically by a daemon sweeper thread.

    :param sweep_interval: Seconds between sweeps; ``None`` or ``<= 0`` disables
        the sweeper thread.
    :param clock: Monotonic time source in seconds (injectable for tests).
    """

    def __init__(
        self,
        *,
        sweep_interval: float | None = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._data: dict[str, _Entry] = {}
        self._lock = ReadWriteLock()
        self._clock = clock
        self._closed = False
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None
        if sweep_interval is not None and sweep_interval > 0:
            self._sweeper = threading.Thread(
                target=self._sweep_loop,
                args=(float(sweep_interval),),
                name="memory-cache-sweeper",
                daemon=True,
            )
            self._sweeper.start()

    # ------------------------- helpers -------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise CacheBackendUnavailable("memory cache is closed")

    def _sweep_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            removed = self.purge_expired()
            if removed:
                log.debug("memory cache sweep removed %d expired keys", removed)

    def _purge_if_expired(self, key: str) -> None:
        with self._lock.write():
            entry = self._data.get(key)
            # re-check: another writer may have replaced the entry meanwhile
            if entry is not None and entry.expired(self._clock()):
                del self._data[key]

    # -------------------------- API ----------------------------

    def set(self, key: str, value: Any, ttl: Ttl = None) -> None:
        self._ensure_open()
        entry = _Entry(encode_value(value), self._clock() + ttl_seconds(ttl))
        with self._lock.write():
            self._data[key] = entry

    def get(self, key: str) -> str:
        self._ensure_open()
        with self._lock.read():
            entry = self._data.get(key)
        if entry is None:
            raise CacheKeyNotFound(key)
        if entry.expired(self._clock()):
            self._purge_if_expired(key)
            raise CacheKeyNotFound(key)
        return entry.value

    def delete(self, key: str) -> None:
        self._ensure_open()
        with self._lock.write():
            self._data.pop(key, None)

    def exists(self, key: str) -> bool:
        self._ensure_open()
        with self._lock.read():
            entry = self._data.get(key)
        if entry is None:
            return False
        if entry.expired(self._clock()):
            self._purge_if_expired(key)
            return False
        return True

    def ping(self) -> bool:
        return not self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stop.set()
        sweeper = self._sweeper
        if sweeper is not None and sweeper.is_alive() and sweeper is not threading.current_thread():
            sweeper.join(timeout=1.0)
        with self._lock.write():
            self._data.clear()

    # ------------------------- extras --------------------------

    def purge_expired(self) -> int:
        """Remove every expired entry; returns how many were dropped."""
        now = self._clock()
        with self._lock.write():
            stale = [key for key, entry in self._data.items() if entry.expired(now)]
            for key in stale:
                del self._data[key]
        return len(stale)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet purged."""
        with self._lock.read():
            return len(self._data)

    def clear(self) -> None:
        with self._lock.write():
            self._data.clear()
