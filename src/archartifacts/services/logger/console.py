"""Console logger: writes log lines through structlog."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.logger.base import LoggerProvider


logger = structlog.get_logger()


class ConsoleLogger(LoggerProvider):
    """Log lines go to the process's structlog output at INFO level."""

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._logger = logger.bind(component="logger", impl="console")

    async def _write(self, logname: str, line: str) -> None:
        self._logger.info(line, logname=logname)
