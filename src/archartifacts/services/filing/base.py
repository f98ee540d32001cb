"""
archartifacts.services.filing.base - Filing Provider Contract
===============================================================

Text and binary files addressed by slash-separated paths relative to the
provider's root.

    create("docs/adr-1.md", "# Use Redis")      parents created as needed
    read("docs/adr-1.md")                       → "# Use Redis"
    update("docs/adr-1.md", "# Use Memcached")  file must already exist
    list("docs")                                → ["adr-1.md"]
    delete("docs/adr-1.md")                     → True
    delete("docs/adr-1.md")                     → False

``upload``, ``download`` and ``remove`` are the HTTP-facing names for
``create``, ``read`` and ``delete``.

Missing Paths:
    - ``read``, ``update``, ``stat``, ``copy`` and ``move`` raise
      ProviderError with error code ``FILE_NOT_FOUND``.
    - ``delete`` returns False and ``exists`` returns False.
    - ``list`` of a missing directory returns ``[]``.

Events (only when an emitter was supplied):
    filing:create  {path, size}        filing:read    {path, size}
    filing:update  {path, size}        filing:delete  {path}
    filing:list    {path, files}       filing:mkdir   {path}
    filing:copy    {source, destination}
    filing:move    {source, destination}

Event payloads carry the content size, never the content itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Union

from archartifacts.core.exceptions import ProviderError
from archartifacts.services.base import Provider


Content = Union[str, bytes]


def file_not_found(path: str) -> ProviderError:
    return ProviderError(
        message=f"File not found: '{path}'",
        error_code="FILE_NOT_FOUND",
        details={"path": path},
    )


class FilingProvider(Provider, ABC):
    """Abstract file store."""

    event_prefix = "filing"

    # =========================================================================
    # Core Operations
    # =========================================================================

    @abstractmethod
    async def create(self, path: str, content: Content) -> None:
        """Write ``content`` to ``path``, replacing any existing file."""

    @abstractmethod
    async def read(self, path: str) -> str:
        """Return the file's text (UTF-8)."""

    @abstractmethod
    async def read_bytes(self, path: str) -> bytes:
        """Return the file's raw bytes."""

    @abstractmethod
    async def update(self, path: str, content: Content) -> None:
        """Replace the content of an existing file."""

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Remove a file or directory tree. False if nothing was there."""

    @abstractmethod
    async def list(self, path: str = "") -> list[str]:
        """Sorted entry names directly under ``path``."""

    @abstractmethod
    async def exists(self, path: str) -> bool: ...

    @abstractmethod
    async def stat(self, path: str) -> dict[str, Any]:
        """Size, kind and timestamps of one entry."""

    @abstractmethod
    async def mkdir(self, path: str) -> None:
        """Create a directory and its parents; an existing one is kept."""

    @abstractmethod
    async def copy(self, source: str, destination: str) -> None: ...

    @abstractmethod
    async def move(self, source: str, destination: str) -> None: ...

    # =========================================================================
    # Derived Operations
    # =========================================================================

    async def list_detailed(self, path: str = "") -> list[dict[str, Any]]:
        """``list`` plus ``stat`` for each entry."""
        entries = []
        for name in await self.list(path):
            entry_path = f"{path.rstrip('/')}/{name}" if path else name
            entries.append({"name": name, "path": entry_path, **await self.stat(entry_path)})
        return entries

    async def upload(self, path: str, content: Content) -> None:
        await self.create(path, content)

    async def download(self, path: str) -> str:
        return await self.read(path)

    async def remove(self, path: str) -> bool:
        return await self.delete(path)
