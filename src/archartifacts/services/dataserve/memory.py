"""In-memory DataServe provider."""

from __future__ import annotations

from typing import Any, Optional

from archartifacts.core.events import EventEmitter
from archartifacts.services.dataserve.base import DataServeProvider


class MemoryDataServe(DataServeProvider):
    """Containers held as dicts in process memory."""

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._containers: dict[str, dict[str, Any]] = {}

    async def _exists(self, name: str) -> bool:
        return name in self._containers

    async def _load(self, name: str) -> dict[str, Any]:
        return dict(self._containers[name])

    async def _save(self, name: str, documents: dict[str, Any]) -> None:
        self._containers[name] = documents

    async def _drop(self, name: str) -> None:
        del self._containers[name]

    async def _names(self) -> list[str]:
        return list(self._containers)
