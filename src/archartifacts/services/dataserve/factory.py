"""Factory for DataServe providers."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.enums import DataServeType
from archartifacts.core.events import EventEmitter
from archartifacts.services.dataserve.base import DataServeProvider
from archartifacts.services.dataserve.routes import register_dataserve_routes


logger = structlog.get_logger()


def create_dataserve(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> DataServeProvider:
    """Create a DataServe provider and wire its HTTP routes.

    ``"file"`` selects FileDataServe; every other value selects
    MemoryDataServe.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("dataserve:instantiated", {"type": type})

    provider: DataServeProvider
    if type == DataServeType.FILE.value:
        from archartifacts.services.dataserve.file import FileDataServe
        provider = FileDataServe(options, emitter)
    else:
        from archartifacts.services.dataserve.memory import MemoryDataServe
        provider = MemoryDataServe(options, emitter)

    logger.info("dataserve_created", requested_type=type, provider=provider.__class__.__name__)
    register_dataserve_routes(options, emitter, provider)
    return provider
