"""
archartifacts.services.dataserve.file - JSON File DataServe
=============================================================

One pretty-printed JSON file per container under ``base_dir``:

    dataserve_data/
    ├── adrs.json        {"<uuid>": {...}, "<uuid>": {...}}
    └── diagrams.json

Every operation re-reads the file, so edits made by another process
between calls are picked up. Disk access runs on a worker thread, and
writes replace the whole file atomically (temporary file, then rename),
so an interrupted write never leaves a truncated container behind.

Options:
    base_dir: Storage directory (default ``./dataserve_data``), created
        on first write.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ProviderError
from archartifacts.services.dataserve.base import DataServeProvider
from archartifacts.services.files import write_atomic


logger = structlog.get_logger()

DEFAULT_BASE_DIR = "./dataserve_data"

# Container names become file names, so path separators are rejected.
_CONTAINER_NAME = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class FileDataServe(DataServeProvider):
    """Containers persisted as JSON files."""

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._base_dir = Path(self._options.get("base_dir") or DEFAULT_BASE_DIR).resolve()
        self._logger = logger.bind(component="dataserve", impl="file", base_dir=str(self._base_dir))

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path(self, name: str) -> Path:
        if not _CONTAINER_NAME.match(name):
            raise ProviderError(
                message=f"Invalid container name: '{name}'",
                error_code="INVALID_CONTAINER_NAME",
                details={"container": name},
            )
        return self._base_dir / f"{name}.json"

    async def _exists(self, name: str) -> bool:
        if not _CONTAINER_NAME.match(name):
            return False
        return await asyncio.to_thread(self._path(name).is_file)

    async def _load(self, name: str) -> dict[str, Any]:
        text = await asyncio.to_thread(self._path(name).read_text, encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)

    async def _save(self, name: str, documents: dict[str, Any]) -> None:
        text = json.dumps(documents, indent=2)
        await asyncio.to_thread(write_atomic, self._path(name), text)
        self._logger.debug("container_written", container=name, documents=len(documents))

    async def _drop(self, name: str) -> None:
        await asyncio.to_thread(self._path(name).unlink)

    async def _names(self) -> list[str]:
        return await asyncio.to_thread(self._list_names)

    def _list_names(self) -> list[str]:
        if not self._base_dir.is_dir():
            return []
        return [path.stem for path in self._base_dir.glob("*.json")]
