"""
archartifacts.services.logger.base - Logger Provider Contract
===============================================================

Application-level log lines, separate from the structlog diagnostics the
services themselves write. Every variant formats a line as:

    <ISO-8601 UTC timestamp> - <hostname> - <logname> - <message>

    2024-06-10T08:15:02.114Z - build-01 - deploy - release 1.4 rolled out

Events (only when an emitter was supplied):
    log:log  {logname, message, line}
"""

from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from archartifacts.services.base import Provider


DEFAULT_LOGNAME = "default"


def format_log_line(logname: str, message: Any) -> str:
    """Build the standard log line for ``message`` under ``logname``."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    timestamp = timestamp.replace("+00:00", "Z")
    return f"{timestamp} - {socket.gethostname()} - {logname} - {message}"


class LoggerProvider(Provider, ABC):
    """Abstract log sink."""

    event_prefix = "log"

    async def log(self, logname: str, message: Any) -> str:
        """Format, write and announce one log line.

        Returns:
            The formatted line as written.
        """
        line = format_log_line(logname, message)
        await self._write(logname, line)
        self._emit("log", logname=logname, message=message, line=line)
        return line

    @abstractmethod
    async def _write(self, logname: str, line: str) -> None:
        """Persist a formatted line."""
