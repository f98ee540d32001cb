"""
archartifacts.services.dataserve.base - DataServe Provider Contract
=====================================================================

Named containers of JSON documents. Each document gets a generated UUID
key when added.

    create_container("adrs")
    add("adrs", {"title": "Use Redis"})      → "5b0e…"   (uuid4 string)
    find("adrs", "redis")                    → [{"key": "5b0e…", "document": {...}}]
    remove("adrs", "5b0e…")                  → True
    remove("adrs", "5b0e…")                  → False

Container Rules:
    - ``create_container`` on an existing name raises ProviderError.
    - ``add`` to a missing container raises ProviderError; containers are
      never created implicitly.
    - ``remove``, ``find`` and ``delete_container`` treat a missing
      container as empty and never raise for it.

Events (only when an emitter was supplied):
    dataserve:createContainer  {container}
    dataserve:deleteContainer  {container}
    dataserve:add              {container, key, document}
    dataserve:remove           {container, key}
    dataserve:find             {container, term, count}
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from archartifacts.core.exceptions import ProviderError
from archartifacts.services.base import Provider
from archartifacts.services.matching import contains_term


class DataServeProvider(Provider, ABC):
    """Abstract document store.

    Subclasses implement container storage through five primitives; the
    public operations, key generation, matching and events live here so
    every variant behaves identically.
    """

    event_prefix = "dataserve"

    # =========================================================================
    # Public API
    # =========================================================================

    async def create_container(self, name: str) -> None:
        """Create an empty container.

        Raises:
            ProviderError: If ``name`` already exists.
        """
        if await self._exists(name):
            raise ProviderError(
                message=f"Container '{name}' already exists.",
                error_code="CONTAINER_EXISTS",
                details={"container": name},
            )
        await self._save(name, {})
        self._emit("createContainer", container=name)

    async def delete_container(self, name: str) -> bool:
        """Drop a container and its documents. False if it did not exist."""
        if not await self._exists(name):
            return False
        await self._drop(name)
        self._emit("deleteContainer", container=name)
        return True

    async def add(self, container: str, document: Any) -> str:
        """Store ``document`` in ``container`` and return its new key.

        Raises:
            ProviderError: If ``container`` does not exist.
        """
        if not await self._exists(container):
            raise ProviderError(
                message=f"Container '{container}' does not exist.",
                error_code="CONTAINER_NOT_FOUND",
                details={"container": container},
            )
        documents = await self._load(container)
        key = str(uuid.uuid4())
        documents[key] = document
        await self._save(container, documents)
        self._emit("add", container=container, key=key, document=document)
        return key

    async def remove(self, container: str, key: str) -> bool:
        """Delete one document. False if the container or key is absent."""
        if not await self._exists(container):
            return False
        documents = await self._load(container)
        if key not in documents:
            return False
        del documents[key]
        await self._save(container, documents)
        self._emit("remove", container=container, key=key)
        return True

    async def find(self, container: str, term: str) -> list[dict[str, Any]]:
        """Documents in ``container`` containing ``term``, case-insensitively."""
        if not term or not await self._exists(container):
            return []
        documents = await self._load(container)
        results = [
            {"key": key, "document": document}
            for key, document in documents.items()
            if contains_term(document, term)
        ]
        self._emit("find", container=container, term=term, count=len(results))
        return results

    async def get(self, container: str, key: str) -> Any:
        """The document stored under ``key``, or None."""
        if not await self._exists(container):
            return None
        return (await self._load(container)).get(key)

    async def list_containers(self) -> list[str]:
        return sorted(await self._names())

    # =========================================================================
    # Storage primitives
    # =========================================================================

    @abstractmethod
    async def _exists(self, name: str) -> bool: ...

    @abstractmethod
    async def _load(self, name: str) -> dict[str, Any]:
        """Return a mutable copy of the container's documents."""

    @abstractmethod
    async def _save(self, name: str, documents: dict[str, Any]) -> None: ...

    @abstractmethod
    async def _drop(self, name: str) -> None: ...

    @abstractmethod
    async def _names(self) -> list[str]: ...
