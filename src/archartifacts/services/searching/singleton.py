"""Process-shared search service."""

from __future__ import annotations

from typing import Any

from archartifacts.services.searching.factory import create_search
from archartifacts.services.searching.provider import SearchProvider
from archartifacts.services.singleton import ServiceSingleton


class SearchService(ServiceSingleton[SearchProvider]):
    """Singleton wrapper around the search index."""

    def __init__(self) -> None:
        super().__init__("Searching", create_search)

    async def add(self, key: str, document: Any) -> bool:
        return await self.get_instance().add(key, document)

    async def remove(self, key: str) -> bool:
        return await self.get_instance().remove(key)

    async def search(self, term: str) -> list[dict[str, Any]]:
        return await self.get_instance().search(term)
