"""Factory for the notifier provider."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.notifying.provider import NotifierProvider
from archartifacts.services.notifying.routes import register_notifier_routes


logger = structlog.get_logger()


def create_notifier(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> NotifierProvider:
    """Create the notifier and wire its HTTP routes.

    ``type`` is accepted for a uniform factory signature and ignored.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("notification:instantiated", {"type": type})

    notifier = NotifierProvider(options, emitter)
    logger.info("notifier_created", requested_type=type)
    register_notifier_routes(options, emitter, notifier)
    return notifier
