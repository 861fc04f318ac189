# comments in English; reST docstrings
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

import requests

from spycats.services._shared.ports.breeds import BreedValidator

log = logging.getLogger(__name__)

DEFAULT_BREEDS_URL = "https://api.thecatapi.com/v1/breeds"


class CatApiBreedValidator(BreedValidator):
    """
    Breed validator backed by TheCatAPI breed catalog.

    The catalog is cached in memory for ``ttl`` seconds:

    - fresh data answers immediately;
    - with no data yet, the first caller fetches synchronously under a lock
      while others wait for that single fetch;
    - stale data is served while at most one background refresh runs; after
      a failed refresh the next attempt waits ``retry_after`` seconds.

    :param url: Catalog endpoint returning ``[{"name": ...}, ...]``.
    :param ttl: Freshness window in seconds.
    :param timeout: HTTP timeout in seconds.
    :param retry_after: Back-off after a failed refresh, in seconds.
    :param session: Optional :class:`requests.Session` (shared connection pool).
    :param background: Refresh stale data in a thread; ``False`` refreshes inline.
    :param clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        url: str = DEFAULT_BREEDS_URL,
        *,
        ttl: float = 600.0,
        timeout: float = 5.0,
        retry_after: float = 30.0,
        session: requests.Session | None = None,
        background: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.ttl = ttl
        self.timeout = timeout
        self.retry_after = retry_after
        self.background = background
        self._session = session or requests.Session()
        self._clock = clock

        self._lock = threading.Lock()
        self._breeds: frozenset[str] = frozenset()
        self._fetched_at: float | None = None
        self._next_attempt_at = 0.0
        self._refreshing = False

    # -------------------- API ------------------------

    def is_valid(self, breed_name: str) -> bool:
        if not breed_name or not breed_name.strip():
            return False
        breeds = self._current_breeds()
        return breed_name.strip().casefold() in breeds

    # -------------------- helpers --------------------

    def _current_breeds(self) -> frozenset[str]:
        now = self._clock()
        fetched_at = self._fetched_at
        if fetched_at is not None and now - fetched_at < self.ttl:
            return self._breeds

        if fetched_at is None:
            # Cold start: one synchronous fetch, other callers wait on the lock
            with self._lock:
                if self._fetched_at is None:
                    self._refresh_locked()
                return self._breeds

        self._schedule_refresh(now)
        return self._breeds

    def _schedule_refresh(self, now: float) -> None:
        with self._lock:
            if self._refreshing or now < self._next_attempt_at:
                return
            self._refreshing = True
        if self.background:
            threading.Thread(
                target=self._refresh_in_background, name="breed-refresh", daemon=True
            ).start()
        else:
            self._refresh_in_background()

    def _refresh_in_background(self) -> None:
        try:
            with self._lock:
                self._refresh_locked()
        finally:
            with self._lock:
                self._refreshing = False

    def _refresh_locked(self) -> None:
        """Fetch the catalog; caller must hold ``self._lock``."""
        try:
            breeds = self._fetch()
        except (requests.RequestException, ValueError) as exc:
            self._next_attempt_at = self._clock() + self.retry_after
            log.warning("breed catalog fetch failed: %s", exc)
            return
        self._breeds = breeds
        self._fetched_at = self._clock()
        log.info("breed catalog refreshed", extra={"item_count": len(breeds)})

    def _fetch(self) -> frozenset[str]:
        resp = self._session.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, list):
            raise ValueError("breed catalog payload is not a list")
        return frozenset(
            str(item["name"]).strip().casefold()
            for item in payload
            if isinstance(item, dict) and item.get("name")
        )
