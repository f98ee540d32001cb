"""
archartifacts.services.caching.base - Cache Provider Contract
===============================================================

All cache variants (memory, Redis, Memcached) implement this ABC so callers
never depend on the backing choice.

    ┌────────────┐  put/get/delete  ┌───────────────┐
    │  Routes /  │ ───────────────→ │ CacheProvider │ (abstract)
    │  Services  │ ←── value|None ─ │               │
    └────────────┘                  └───────┬───────┘
                                ┌───────────┼─────────────┐
                           ┌────▼───┐  ┌────▼────┐  ┌─────▼─────┐
                           │ Memory │  │  Redis  │  │ Memcached │
                           └────────┘  └─────────┘  └───────────┘

Absent Marker:
    ``get()`` returns ``None`` for a missing key in every variant. Falsy
    stored values (``0``, ``""``, ``False``, ``[]``) are returned unchanged,
    so ``value is None`` is the only "not found" test callers need. Storing
    ``None`` itself is indistinguishable from absence.

Events (only when an emitter was supplied):
    cache:put     {key, value[, ttl]}
    cache:get     {key, value}          value is None on a miss
    cache:delete  {key}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from archartifacts.services.base import Provider


class CacheProvider(Provider, ABC):
    """Abstract key/value cache.

    Concurrency:
        No locking. Two concurrent ``put()`` calls for the same key race and
        the last one to complete wins.
    """

    event_prefix = "cache"

    @abstractmethod
    async def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store ``value`` under ``key``, replacing any existing entry.

        Args:
            key: Cache key.
            value: Any JSON-serializable value.
            ttl: Expiry in seconds. Ignored by the in-memory variant; passed
                through verbatim by Redis and Memcached.
        """

    @abstractmethod
    async def get(self, key: str) -> Any:
        """Return the value for ``key``, or None if absent."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""

    def get_key_stats(self) -> list[dict[str, Any]]:
        """Per-key access statistics, most recently accessed first.

        Only the in-memory variant tracks statistics; others return ``[]``.
        """
        return []
