"""Read-through cache for snapshots loaded from the store.

Entries live in a Django cache backend (the ``attendance`` alias by
default) as ``(value, stored_at_ms, ttl_ms)``. Expiry is decided by this
object's clock and is lazy: an entry read more than its TTL after it was
set is dropped and reported as absent. There is no background sweep.

Prefix invalidation needs the list of live keys, which is kept in the
backend under ``INDEX_KEY``.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

from django.core.cache import caches
from django.core.cache.backends.base import BaseCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

CACHE_ALIAS = "attendance"
INDEX_KEY = "attendance:index"

TICKET_TYPES_KEY = "ticket_types"
TICKETS_KEY = "tickets"
PARTICIPANT_STATUSES_KEY = "participant_statuses"

# Guards read-modify-write of the key index for every cache in the process.
_index_lock = threading.Lock()


def _wall_clock_ms() -> float:
    return time.time() * 1000


class ReadThroughCache:
    """Key/value cache with per-entry TTLs in milliseconds.

    ``alias`` names the entry in ``settings.CACHES`` holding the entries.
    ``clock`` returns the current time in milliseconds; tests inject a
    synthetic one. A disabled cache never stores anything.
    """

    def __init__(
        self,
        alias: str = CACHE_ALIAS,
        clock: Callable[[], float] = _wall_clock_ms,
        enabled: bool = True,
    ) -> None:
        self._alias = alias
        self._clock = clock
        self.enabled = enabled

    @property
    def _backend(self) -> BaseCache:
        # Connections are per thread; look the backend up on every use.
        return caches[self._alias]

    def get(self, key: str) -> Any | None:
        if not self.enabled:
            return None
        entry = self._backend.get(key)
        if entry is None:
            return None
        value, stored_at_ms, ttl_ms = entry
        if self._clock() - stored_at_ms > ttl_ms:
            self._forget([key])
            return None
        return value

    def set(self, key: str, value: Any, ttl_ms: float) -> None:
        if not self.enabled:
            return
        self._backend.set(key, (value, self._clock(), ttl_ms), timeout=None)
        with _index_lock:
            index = self._index()
            if key not in index:
                self._backend.set(INDEX_KEY, index | {key}, timeout=None)

    def get_or_load(self, key: str, ttl_ms: float, loader: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        self.set(key, value, ttl_ms)
        return value

    def invalidate(self, key_prefix: str) -> int:
        """Drop every entry whose key starts with ``key_prefix``."""
        stale = sorted(key for key in self._index() if key.startswith(key_prefix))
        if stale:
            self._forget(stale)
            logger.debug("Invalidated cache keys %s", stale)
        return len(stale)

    def clear(self) -> None:
        with _index_lock:
            self._backend.delete_many([*self._index(), INDEX_KEY])

    def _index(self) -> frozenset[str]:
        return self._backend.get(INDEX_KEY) or frozenset()

    def _forget(self, keys: list[str]) -> None:
        with _index_lock:
            self._backend.delete_many(keys)
            self._backend.set(INDEX_KEY, self._index() - set(keys), timeout=None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._index())
