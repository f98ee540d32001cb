"""Factory for the scheduler provider."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.scheduling.provider import SchedulerProvider
from archartifacts.services.scheduling.routes import register_scheduler_routes


logger = structlog.get_logger()


def create_scheduler(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> SchedulerProvider:
    """Create the scheduler and wire its HTTP routes.

    There is a single in-process variant; ``type`` is accepted for a
    uniform factory signature and otherwise ignored.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("scheduler:instantiated", {"type": type})

    scheduler = SchedulerProvider(options, emitter)
    logger.info("scheduler_created", requested_type=type)
    register_scheduler_routes(options, emitter, scheduler)
    return scheduler
