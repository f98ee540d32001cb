"""Process-shared cache service."""

from __future__ import annotations

from typing import Any, Optional

from archartifacts.core.enums import CacheType
from archartifacts.services.caching.base import CacheProvider
from archartifacts.services.caching.factory import create_cache
from archartifacts.services.singleton import ServiceSingleton


class CacheService(ServiceSingleton[CacheProvider]):
    """Singleton wrapper around the cache provider.

    The pass-through methods raise ServiceNotInitializedError when called
    before ``initialize()``.
    """

    def __init__(self) -> None:
        super().__init__("Cache", create_cache, default_type=CacheType.MEMORY.value)

    async def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        await self.get_instance().put(key, value, ttl)

    async def get(self, key: str) -> Any:
        return await self.get_instance().get(key)

    async def delete(self, key: str) -> None:
        await self.get_instance().delete(key)

    def get_key_stats(self) -> list[dict[str, Any]]:
        return self.get_instance().get_key_stats()
