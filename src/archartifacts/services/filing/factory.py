"""Factory for filing providers."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.filing.base import FilingProvider
from archartifacts.services.filing.routes import register_filing_routes


logger = structlog.get_logger()


def create_filing(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> FilingProvider:
    """Create a filing provider and wire its HTTP routes.

    ``"local"`` is the only variant; every other value, including the
    remote store names ``"ftp"``, ``"s3"`` and ``"git"``, selects
    LocalFiling.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("filing:instantiated", {"type": type})

    from archartifacts.services.filing.local import LocalFiling
    filing: FilingProvider = LocalFiling(options, emitter)

    logger.info("filing_created", requested_type=type, provider=filing.__class__.__name__)
    register_filing_routes(options, emitter, filing)
    return filing
