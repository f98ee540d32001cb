"""Factory for logger providers."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.enums import LoggerType
from archartifacts.core.events import EventEmitter
from archartifacts.services.logger.base import LoggerProvider
from archartifacts.services.logger.routes import register_logger_routes


logger = structlog.get_logger()


def create_logger(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> LoggerProvider:
    """Create a logger provider and wire its HTTP routes.

    ``"file"`` selects FileLogger; every other value selects ConsoleLogger.

    Raises:
        ConfigurationError: If ``"file"`` is requested without a filename.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("log:instantiated", {"type": type})

    provider: LoggerProvider
    if type == LoggerType.FILE.value:
        from archartifacts.services.logger.file import FileLogger
        provider = FileLogger(options, emitter)
    else:
        from archartifacts.services.logger.console import ConsoleLogger
        provider = ConsoleLogger(options, emitter)

    logger.info("logger_created", requested_type=type, provider=provider.__class__.__name__)
    register_logger_routes(options, emitter, provider)
    return provider
