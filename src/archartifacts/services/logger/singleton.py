"""Process-shared logger service."""

from __future__ import annotations

from typing import Any

from archartifacts.core.enums import LoggerType
from archartifacts.services.logger.base import LoggerProvider
from archartifacts.services.logger.factory import create_logger
from archartifacts.services.singleton import ServiceSingleton


class LoggerService(ServiceSingleton[LoggerProvider]):
    """Singleton wrapper around the logger provider.

    The level helpers log under a logname equal to the level, so
    ``info("started")`` writes ``... - info - started``.
    """

    def __init__(self) -> None:
        super().__init__("Logging", create_logger, default_type=LoggerType.CONSOLE.value)

    async def log(self, logname: str, message: Any) -> str:
        return await self.get_instance().log(logname, message)

    async def info(self, message: Any) -> str:
        return await self.log("info", message)

    async def warning(self, message: Any) -> str:
        return await self.log("warning", message)

    async def error(self, message: Any) -> str:
        return await self.log("error", message)
