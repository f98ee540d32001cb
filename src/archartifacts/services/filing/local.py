"""
archartifacts.services.filing.local - Local Disk Filing
=========================================================

Files live under one root directory:

    content/
    ├── docs/
    │   └── adr-1.md
    └── templates/
        └── adr.json

Every path is resolved against the root, symlinks included, and must stay
inside it. ``../secrets``, ``/etc/passwd`` and a symlink pointing outside
all raise ProviderError (``PATH_ESCAPE``) before the disk is touched.

Blocking calls run on a worker thread. Writes go through a temporary file
and a rename, so a reader never sees a half-written file.

Options:
    base_dir: Root directory (default ``./content``), created on first
        write.
"""

from __future__ import annotations

import asyncio
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ProviderError
from archartifacts.services.files import write_atomic
from archartifacts.services.filing.base import Content, FilingProvider, file_not_found


logger = structlog.get_logger()

DEFAULT_BASE_DIR = "./content"


class LocalFiling(FilingProvider):
    """Files stored on the local disk under ``base_dir``."""

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._base_dir = Path(self._options.get("base_dir") or DEFAULT_BASE_DIR).resolve()
        self._logger = logger.bind(component="filing", impl="local", base_dir=str(self._base_dir))

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def resolve(self, path: str) -> Path:
        """Map a relative path onto the disk.

        Raises:
            ProviderError: If the result would fall outside ``base_dir``.
        """
        if not path or path in (".", "/"):
            return self._base_dir
        resolved = (self._base_dir / path).resolve()
        if not resolved.is_relative_to(self._base_dir):
            self._logger.warning("path_escape_rejected", path=path)
            raise ProviderError(
                message=f"Access denied: '{path}' is outside the filing root.",
                error_code="PATH_ESCAPE",
                details={"path": path},
            )
        return resolved

    # =========================================================================
    # Reads
    # =========================================================================

    async def read(self, path: str) -> str:
        data = await self.read_bytes(path)
        return data.decode("utf-8")

    async def read_bytes(self, path: str) -> bytes:
        target = self.resolve(path)
        try:
            data = await asyncio.to_thread(target.read_bytes)
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise file_not_found(path) from exc
        self._emit("read", path=path, size=len(data))
        return data

    async def list(self, path: str = "") -> list[str]:
        target = self.resolve(path)
        files = await asyncio.to_thread(_list_dir, target)
        self._emit("list", path=path, files=files)
        return files

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def stat(self, path: str) -> dict[str, Any]:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(_stat, target)
        except FileNotFoundError as exc:
            raise file_not_found(path) from exc

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, path: str, content: Content) -> None:
        target = self._writable(path)
        await asyncio.to_thread(write_atomic, target, content)
        self._emit("create", path=path, size=_size(content))

    async def update(self, path: str, content: Content) -> None:
        target = self._writable(path)
        if not await asyncio.to_thread(target.is_file):
            raise file_not_found(path)
        await asyncio.to_thread(write_atomic, target, content)
        self._emit("update", path=path, size=_size(content))

    async def delete(self, path: str) -> bool:
        target = self._writable(path)
        removed = await asyncio.to_thread(_remove, target)
        if removed:
            self._emit("delete", path=path)
        return removed

    async def mkdir(self, path: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        self._emit("mkdir", path=path)

    async def copy(self, source: str, destination: str) -> None:
        src, dst = self.resolve(source), self._writable(destination)
        try:
            await asyncio.to_thread(_copy, src, dst)
        except FileNotFoundError as exc:
            raise file_not_found(source) from exc
        self._emit("copy", source=source, destination=destination)

    async def move(self, source: str, destination: str) -> None:
        src, dst = self._writable(source), self._writable(destination)
        if not await asyncio.to_thread(src.exists):
            raise file_not_found(source)
        await asyncio.to_thread(_move, src, dst)
        self._emit("move", source=source, destination=destination)

    def _writable(self, path: str) -> Path:
        target = self.resolve(path)
        if target == self._base_dir:
            raise ProviderError(
                message="The filing root itself cannot be written or removed.",
                error_code="INVALID_PATH",
                details={"path": path},
            )
        return target


# =============================================================================
# Blocking helpers (run through asyncio.to_thread)
# =============================================================================

def _size(content: Content) -> int:
    return len(content.encode("utf-8")) if isinstance(content, str) else len(content)


def _list_dir(directory: Path) -> list[str]:
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir())


def _stat(target: Path) -> dict[str, Any]:
    result = target.stat()
    return {
        "size": result.st_size,
        "is_file": target.is_file(),
        "is_directory": target.is_dir(),
        "modified_at": datetime.fromtimestamp(result.st_mtime, tz=timezone.utc),
        "changed_at": datetime.fromtimestamp(result.st_ctime, tz=timezone.utc),
    }


def _remove(target: Path) -> bool:
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
        return True
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    return True


def _copy(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    if source.is_dir():
        shutil.copytree(source, destination, dirs_exist_ok=True)
    else:
        shutil.copyfile(source, destination)


def _move(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(destination))
