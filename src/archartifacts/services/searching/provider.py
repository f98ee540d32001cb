"""
archartifacts.services.searching.provider - In-Memory Document Search
=======================================================================

A keyed collection of JSON documents with substring search. Matching is
case-insensitive over every string value at any nesting depth (see
``archartifacts.services.matching``).

Events (only when an emitter was supplied):
    search:add         {key, document}
    search:add:error   {key, error}       key already present
    search:remove      {key}
    search:search      {term, count}
"""

from __future__ import annotations

from typing import Any, Optional

from archartifacts.core.events import EventEmitter
from archartifacts.services.base import Provider
from archartifacts.services.matching import contains_term


class SearchProvider(Provider):
    """Document index held in memory.

    Example:
        >>> index = SearchProvider()
        >>> await index.add("adr-1", {"title": "Use Redis for caching"})
        True
        >>> await index.search("redis")
        [{'key': 'adr-1', 'document': {'title': 'Use Redis for caching'}}]
    """

    event_prefix = "search"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._documents: dict[str, Any] = {}

    async def add(self, key: str, document: Any) -> bool:
        """Index ``document`` under ``key``.

        Returns:
            False (and emits ``search:add:error``) if ``key`` is taken.
        """
        if key in self._documents:
            self._emit("add:error", key=key, error="Key already exists.")
            return False
        self._documents[key] = document
        self._emit("add", key=key, document=document)
        return True

    async def remove(self, key: str) -> bool:
        """Drop ``key`` from the index. Returns False if it was not there."""
        if key not in self._documents:
            return False
        del self._documents[key]
        self._emit("remove", key=key)
        return True

    async def search(self, term: str) -> list[dict[str, Any]]:
        """Return ``{key, document}`` for every document containing ``term``.

        Results follow insertion order. An empty term matches nothing.
        """
        if not term:
            return []
        results = [
            {"key": key, "document": document}
            for key, document in self._documents.items()
            if contains_term(document, term)
        ]
        self._emit("search", term=term, count=len(results))
        return results

    async def get(self, key: str) -> Any:
        """Return the document stored under ``key``, or None."""
        return self._documents.get(key)

    async def count(self) -> int:
        return len(self._documents)
