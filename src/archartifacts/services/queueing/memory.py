"""In-memory queue provider: one deque per queue name."""

from __future__ import annotations

from collections import deque
from typing import Any, Optional

from archartifacts.core.events import EventEmitter
from archartifacts.services.queueing.base import DEFAULT_QUEUE, QueueProvider


class MemoryQueue(QueueProvider):
    """Queues held in process memory.

    A queue exists once something has been enqueued on it. Reads of an
    unknown name answer as for an empty queue and create nothing, so
    ``list_queues()`` reports the same names a Redis-backed queue would.

    Example:
        >>> queue = MemoryQueue()
        >>> await queue.enqueue("x")
        >>> await queue.enqueue("y")
        >>> await queue.dequeue()
        'x'
        >>> await queue.size()
        1
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._queues: dict[str, deque[Any]] = {}

    async def enqueue(self, item: Any, queue: str = DEFAULT_QUEUE) -> None:
        self._queues.setdefault(queue, deque()).append(item)
        self._emit("enqueue", queue=queue, item=item)

    async def dequeue(self, queue: str = DEFAULT_QUEUE) -> Any:
        items = self._queues.get(queue)
        if not items:
            return None
        item = items.popleft()
        if not items:
            del self._queues[queue]
        self._emit("dequeue", queue=queue, item=item)
        return item

    async def size(self, queue: str = DEFAULT_QUEUE) -> int:
        items = self._queues.get(queue)
        return len(items) if items else 0

    async def peek(self, queue: str = DEFAULT_QUEUE) -> Any:
        items = self._queues.get(queue)
        return items[0] if items else None

    async def clear(self, queue: str = DEFAULT_QUEUE) -> int:
        items = self._queues.pop(queue, None)
        removed = len(items) if items else 0
        self._emit("clear", queue=queue, removed=removed)
        return removed

    async def list_queues(self) -> list[str]:
        return list(self._queues)
