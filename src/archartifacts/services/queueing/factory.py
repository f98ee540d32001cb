"""Factory for queue providers."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.enums import QueueType
from archartifacts.core.events import EventEmitter
from archartifacts.services.queueing.base import QueueProvider
from archartifacts.services.queueing.routes import register_queue_routes


logger = structlog.get_logger()


def create_queue(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> QueueProvider:
    """Create a queue provider and wire its HTTP routes.

    ``"redis"`` selects RedisQueue; every other value selects MemoryQueue.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("queue:instantiated", {"type": type})

    queue: QueueProvider
    if type == QueueType.REDIS.value:
        from archartifacts.services.queueing.redis import RedisQueue
        queue = RedisQueue(options, emitter)
    else:
        from archartifacts.services.queueing.memory import MemoryQueue
        queue = MemoryQueue(options, emitter)

    logger.info("queue_created", requested_type=type, provider=queue.__class__.__name__)
    register_queue_routes(options, emitter, queue)
    return queue
