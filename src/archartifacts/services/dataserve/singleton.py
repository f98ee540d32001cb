"""Process-shared DataServe service."""

from __future__ import annotations

from typing import Any

from archartifacts.core.enums import DataServeType
from archartifacts.services.dataserve.base import DataServeProvider
from archartifacts.services.dataserve.factory import create_dataserve
from archartifacts.services.singleton import ServiceSingleton


class DataServeService(ServiceSingleton[DataServeProvider]):
    """Singleton wrapper around the DataServe provider."""

    def __init__(self) -> None:
        super().__init__("DataServe", create_dataserve, default_type=DataServeType.MEMORY.value)

    async def create_container(self, name: str) -> None:
        await self.get_instance().create_container(name)

    async def delete_container(self, name: str) -> bool:
        return await self.get_instance().delete_container(name)

    async def add(self, container: str, document: Any) -> str:
        return await self.get_instance().add(container, document)

    async def remove(self, container: str, key: str) -> bool:
        return await self.get_instance().remove(container, key)

    async def find(self, container: str, term: str) -> list[dict[str, Any]]:
        return await self.get_instance().find(container, term)
