"""
archartifacts.services.queueing.redis - Redis Queue
=====================================================

Each named queue is a Redis list at ``<key_prefix><queue>``; items are
JSON-encoded, pushed with RPUSH and popped with LPOP.

Options:
    url: Redis connection URL.
    client: Injected ``redis.asyncio`` compatible client (not closed by us).
    key_prefix: List key prefix (default ``"queue:"``).
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.clients import build_redis_client
from archartifacts.services.queueing.base import DEFAULT_QUEUE, QueueProvider
from archartifacts.services.serialization import decode_text, encode_json


logger = structlog.get_logger()

DEFAULT_KEY_PREFIX = "queue:"


class RedisQueue(QueueProvider):
    """Named queues stored as Redis lists.

    Raises:
        ConfigurationError: If neither ``client`` nor ``url`` is supplied.
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._key_prefix: str = self._options.get("key_prefix", DEFAULT_KEY_PREFIX)
        self._client, self._owns_client = build_redis_client(self._options, "RedisQueue")
        self._logger = logger.bind(component="queue", impl="redis")

    def _key(self, queue: str) -> str:
        return f"{self._key_prefix}{queue}"

    async def enqueue(self, item: Any, queue: str = DEFAULT_QUEUE) -> None:
        await self._client.rpush(self._key(queue), encode_json(item))
        self._emit("enqueue", queue=queue, item=item)

    async def dequeue(self, queue: str = DEFAULT_QUEUE) -> Any:
        raw = await self._client.lpop(self._key(queue))
        if raw is None:
            return None
        item = decode_text(raw)
        self._emit("dequeue", queue=queue, item=item)
        return item

    async def size(self, queue: str = DEFAULT_QUEUE) -> int:
        return int(await self._client.llen(self._key(queue)))

    async def peek(self, queue: str = DEFAULT_QUEUE) -> Any:
        raw = await self._client.lindex(self._key(queue), 0)
        return None if raw is None else decode_text(raw)

    async def clear(self, queue: str = DEFAULT_QUEUE) -> int:
        key = self._key(queue)
        removed = int(await self._client.llen(key))
        await self._client.delete(key)
        self._emit("clear", queue=queue, removed=removed)
        return removed

    async def list_queues(self) -> list[str]:
        names = []
        async for key in self._client.scan_iter(match=f"{self._key_prefix}*"):
            if isinstance(key, bytes):
                key = key.decode("utf-8")
            names.append(key[len(self._key_prefix):])
        return sorted(names)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
            self._logger.debug("redis_client_closed")
