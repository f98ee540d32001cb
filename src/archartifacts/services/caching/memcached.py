"""
archartifacts.services.caching.memcached - Memcached Cache
============================================================

Cache variant backed by ``aiomcache``. Memcached stores bytes only, so
values are coerced to text on write and JSON-parsed on read:

    put("n", 5)          -> stores b"5"           -> get("n") == 5
    put("d", {"a": 1})   -> stores b'{"a":1}'     -> get("d") == {"a": 1}
    put("s", "hello")    -> stores b"hello"       -> get("s") == "hello"
    put("s", "123")      -> stores b"123"         -> get("s") == 123

The last line is a known lossy case: a string that is itself valid JSON
reads back decoded.

Options:
    url: ``host:port`` of the Memcached server (port defaults to 11211).
    client: A ready ``aiomcache.Client`` compatible object. Takes precedence
        over ``url`` and is not closed by ``close()``.
"""

from __future__ import annotations

from typing import Any, Optional

import aiomcache
import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ConfigurationError
from archartifacts.services.caching.base import CacheProvider
from archartifacts.services.serialization import coerce_to_text, decode_text


logger = structlog.get_logger()

DEFAULT_MEMCACHED_PORT = 11211


class MemcachedCache(CacheProvider):
    """Memcached-backed cache.

    Raises:
        ConfigurationError: If neither ``client`` nor ``url`` is supplied,
            or ``url`` has a non-numeric port.
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._logger = logger.bind(component="cache", impl="memcached")

        client = self._options.get("client")
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            host, port = parse_memcached_url(self._options.get("url"))
            self._client = aiomcache.Client(host, port)
            self._owns_client = True

    async def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        await self._client.set(
            key.encode("utf-8"),
            coerce_to_text(value).encode("utf-8"),
            exptime=ttl or 0,
        )
        self._emit("put", key=key, value=value, ttl=ttl)

    async def get(self, key: str) -> Any:
        raw = await self._client.get(key.encode("utf-8"))
        value = None if raw is None else decode_text(raw)
        self._emit("get", key=key, value=value)
        return value

    async def delete(self, key: str) -> None:
        await self._client.delete(key.encode("utf-8"))
        self._emit("delete", key=key)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()
            self._logger.debug("memcached_client_closed")


def parse_memcached_url(url: Optional[str]) -> tuple[str, int]:
    """Split ``host:port`` (an optional ``memcached://`` scheme is allowed).

    Raises:
        ConfigurationError: On a missing URL or a non-numeric port.
    """
    if not url:
        raise ConfigurationError(
            message="Memcached connection URL is required.",
            details={"provider": "MemcachedCache"},
        )

    address = url.split("://", 1)[-1].rstrip("/")
    host, _, port = address.partition(":")
    if not port:
        return host, DEFAULT_MEMCACHED_PORT
    try:
        return host, int(port)
    except ValueError as exc:
        raise ConfigurationError(
            message=f"Invalid Memcached port in URL: {url}",
            details={"provider": "MemcachedCache", "url": url},
        ) from exc
