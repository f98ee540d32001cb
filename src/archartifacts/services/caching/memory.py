"""
archartifacts.services.caching.memory - In-Memory Cache
=========================================================

The default cache variant: a plain dict with no TTL and no eviction of
cached values.

Key Statistics:
    Alongside the values, the cache keeps access statistics for at most
    ``max_key_stats`` keys (default 100):

        {"cachekey": "user:1", "hits": 3, "last_access": 1718000000.12, "created": ...}

    - ``put`` and a successful ``get`` refresh ``last_access``.
    - a successful ``get`` increments ``hits``; a miss records nothing.
    - ``delete`` drops the key's record.

    When the bound is exceeded, the least recently accessed record is
    evicted. Records are kept in an OrderedDict in touch order, so two
    records with the same timestamp are resolved by touch order: the one
    touched earlier goes first. Only the statistics are bounded; cached
    values are never evicted.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.caching.base import CacheProvider


logger = structlog.get_logger()

DEFAULT_MAX_KEY_STATS = 100


class MemoryCache(CacheProvider):
    """Dict-backed cache with bounded per-key access statistics.

    Options:
        max_key_stats: Maximum number of key statistics records kept.

    Example:
        >>> cache = MemoryCache()
        >>> await cache.put("user:1", {"name": "Ann"})
        >>> await cache.get("user:1")
        {'name': 'Ann'}
        >>> await cache.get("missing-key") is None
        True
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._store: dict[str, Any] = {}
        self._key_stats: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._max_key_stats = int(self._options.get("max_key_stats", DEFAULT_MAX_KEY_STATS))
        self._logger = logger.bind(component="cache", impl="memory")

    async def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        self._store[key] = value
        self._touch(key, hit=False)
        self._emit("put", key=key, value=value)

    async def get(self, key: str) -> Any:
        value = self._store.get(key)
        if value is not None:
            self._touch(key, hit=True)
        self._emit("get", key=key, value=value)
        return value

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self._key_stats.pop(key, None)
        self._emit("delete", key=key)

    def size(self) -> int:
        """Number of cached entries."""
        return len(self._store)

    def get_key_stats(self) -> list[dict[str, Any]]:
        # Touch order is access order, so newest-first is just reversed.
        return [dict(stats) for stats in reversed(self._key_stats.values())]

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _touch(self, key: str, hit: bool) -> None:
        now = time.time()
        stats = self._key_stats.get(key)
        if stats is None:
            stats = {"cachekey": key, "hits": 0, "last_access": now, "created": now}
            self._key_stats[key] = stats
        else:
            self._key_stats.move_to_end(key)

        if hit:
            stats["hits"] += 1
        stats["last_access"] = now

        while len(self._key_stats) > self._max_key_stats:
            evicted_key, _ = self._key_stats.popitem(last=False)
            self._logger.debug("key_stats_evicted", key=evicted_key)
