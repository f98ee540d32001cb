"""
archartifacts.services.files - Blocking File Helpers
======================================================

Synchronous helpers shared by the file-backed providers. Providers call
them through ``asyncio.to_thread`` so disk I/O never blocks the event loop.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union


def write_atomic(path: Path, data: Union[str, bytes]) -> None:
    """Replace ``path`` with ``data`` in one step.

    The content goes to a temporary file in the same directory, which is
    then renamed over ``path``. A reader sees either the old file or the
    complete new one; an interrupted write leaves the old file intact.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.encode("utf-8") if isinstance(data, str) else data
    handle = tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    )
    try:
        with handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(handle.name, path)
    except BaseException:
        Path(handle.name).unlink(missing_ok=True)
        raise


def append_line(path: Path, line: str) -> None:
    """Append ``line`` plus a newline with a single write call."""
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
