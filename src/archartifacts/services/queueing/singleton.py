"""Process-shared queue service."""

from __future__ import annotations

from typing import Any

from archartifacts.core.enums import QueueType
from archartifacts.services.queueing.base import DEFAULT_QUEUE, QueueProvider
from archartifacts.services.queueing.factory import create_queue
from archartifacts.services.singleton import ServiceSingleton


class QueueService(ServiceSingleton[QueueProvider]):
    """Singleton wrapper around the queue provider."""

    def __init__(self) -> None:
        super().__init__("Queueing", create_queue, default_type=QueueType.MEMORY.value)

    async def enqueue(self, item: Any, queue: str = DEFAULT_QUEUE) -> None:
        await self.get_instance().enqueue(item, queue)

    async def dequeue(self, queue: str = DEFAULT_QUEUE) -> Any:
        return await self.get_instance().dequeue(queue)

    async def peek(self, queue: str = DEFAULT_QUEUE) -> Any:
        return await self.get_instance().peek(queue)

    async def size(self, queue: str = DEFAULT_QUEUE) -> int:
        return await self.get_instance().size(queue)

    async def clear(self, queue: str = DEFAULT_QUEUE) -> int:
        return await self.get_instance().clear(queue)

    async def list_queues(self) -> list[str]:
        return await self.get_instance().list_queues()
