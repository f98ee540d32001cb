"""Factory for the search provider."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.searching.provider import SearchProvider
from archartifacts.services.searching.routes import register_search_routes


logger = structlog.get_logger()


def create_search(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> SearchProvider:
    """Create the in-memory search index and wire its HTTP routes.

    ``type`` is accepted for a uniform factory signature and ignored.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("search:instantiated", {"type": type})

    index = SearchProvider(options, emitter)
    logger.info("search_created", requested_type=type)
    register_search_routes(options, emitter, index)
    return index
