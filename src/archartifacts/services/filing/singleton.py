"""Process-shared filing service."""

from __future__ import annotations

from archartifacts.core.enums import FilingType
from archartifacts.services.filing.base import Content, FilingProvider
from archartifacts.services.filing.factory import create_filing
from archartifacts.services.singleton import ServiceSingleton


class FilingService(ServiceSingleton[FilingProvider]):
    """Singleton wrapper around the filing provider."""

    def __init__(self) -> None:
        super().__init__("Filing", create_filing, default_type=FilingType.LOCAL.value)

    async def create(self, path: str, content: Content) -> None:
        await self.get_instance().create(path, content)

    async def read(self, path: str) -> str:
        return await self.get_instance().read(path)

    async def update(self, path: str, content: Content) -> None:
        await self.get_instance().update(path, content)

    async def delete(self, path: str) -> bool:
        return await self.get_instance().delete(path)

    async def list(self, path: str = "") -> list[str]:
        return await self.get_instance().list(path)

    async def exists(self, path: str) -> bool:
        return await self.get_instance().exists(path)
