"""Factory for cache providers."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.enums import CacheType
from archartifacts.core.events import EventEmitter
from archartifacts.services.caching.base import CacheProvider
from archartifacts.services.caching.routes import register_cache_routes


logger = structlog.get_logger()


def create_cache(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> CacheProvider:
    """Create a cache provider and wire its HTTP routes.

    The ``type`` string is matched exactly:
        - "redis"     → RedisCache
        - "memcached" → MemcachedCache
        - anything else, including None → MemoryCache

    An unrecognised type is never an error; it falls back to memory.

    Args:
        type: Provider variant name.
        options: Provider options. ``options["app"]`` (a FastAPI app) makes
            the factory mount the ``/api/caching`` routes.
        emitter: Shared EventEmitter, or None.

    Returns:
        The constructed CacheProvider.

    Raises:
        ConfigurationError: If a network variant is missing its connection
            options.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("cache:instantiated", {"type": type})

    cache: CacheProvider
    if type == CacheType.REDIS.value:
        from archartifacts.services.caching.redis import RedisCache
        cache = RedisCache(options, emitter)
    elif type == CacheType.MEMCACHED.value:
        from archartifacts.services.caching.memcached import MemcachedCache
        cache = MemcachedCache(options, emitter)
    else:
        from archartifacts.services.caching.memory import MemoryCache
        cache = MemoryCache(options, emitter)

    logger.info("cache_created", requested_type=type, provider=cache.__class__.__name__)
    register_cache_routes(options, emitter, cache)
    return cache
