"""
archartifacts.services.caching.redis - Redis Cache
====================================================

Cache variant backed by ``redis.asyncio``. Values are stored as JSON text so
that every JSON type (numbers, booleans, lists, objects, strings) reads back
as what was written.

Options:
    url: Redis connection URL (``redis://localhost:6379/0``).
    client: A ready ``redis.asyncio`` compatible client. Takes precedence
        over ``url`` and is not closed by ``close()``.
    key_prefix: Optional prefix prepended to every key (default ``""``).
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.caching.base import CacheProvider
from archartifacts.services.clients import build_redis_client
from archartifacts.services.serialization import decode_text, encode_json


logger = structlog.get_logger()


class RedisCache(CacheProvider):
    """Redis-backed cache.

    Raises:
        ConfigurationError: If neither ``client`` nor ``url`` is supplied.
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._key_prefix: str = self._options.get("key_prefix", "")
        self._client, self._owns_client = build_redis_client(self._options, "RedisCache")
        self._logger = logger.bind(component="cache", impl="redis")

    async def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        await self._client.set(self._key(key), encode_json(value), ex=ttl)
        self._emit("put", key=key, value=value, ttl=ttl)

    async def get(self, key: str) -> Any:
        raw = await self._client.get(self._key(key))
        value = None if raw is None else decode_text(raw)
        self._emit("get", key=key, value=value)
        return value

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))
        self._emit("delete", key=key)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
            self._logger.debug("redis_client_closed")

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"
