"""
File logger: appends log lines to ``options["filename"]``.

The parent directory is created on construction. Each line is written
with a single append on a worker thread, so the event loop never waits
on the disk and concurrent writers never interleave within a line.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ConfigurationError
from archartifacts.services.files import append_line
from archartifacts.services.logger.base import LoggerProvider


logger = structlog.get_logger()


class FileLogger(LoggerProvider):
    """Append-only log file.

    Raises:
        ConfigurationError: If ``filename`` is missing.
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        filename = self._options.get("filename")
        if not filename:
            raise ConfigurationError(
                message="FileLogger requires a 'filename' option",
                details={"provider": "FileLogger"},
            )
        self._path = Path(filename)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._logger = logger.bind(component="logger", impl="file", path=str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    async def _write(self, logname: str, line: str) -> None:
        await asyncio.to_thread(append_line, self._path, line)
