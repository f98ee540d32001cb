"""Factory for the measuring provider."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.measuring.provider import MeasuringProvider
from archartifacts.services.measuring.routes import register_measuring_routes


logger = structlog.get_logger()


def create_measuring(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> MeasuringProvider:
    """Create the metric store and wire its HTTP routes.

    ``type`` is accepted for a uniform factory signature and ignored.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("measuring:instantiated", {"type": type})

    metrics = MeasuringProvider(options, emitter)
    logger.info("measuring_created", requested_type=type)
    register_measuring_routes(options, emitter, metrics)
    return metrics
