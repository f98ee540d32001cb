"""
archartifacts.services.queueing.base - Queue Provider Contract
================================================================

Named FIFO queues. Every operation takes a queue name that defaults to
``"default"``; a queue springs into existence on first use.

Events (only when an emitter was supplied):
    queue:enqueue  {queue, item}
    queue:dequeue  {queue, item}     not emitted when the queue was empty
    queue:clear    {queue, removed}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from archartifacts.services.base import Provider


DEFAULT_QUEUE = "default"


class QueueProvider(Provider, ABC):
    """Abstract set of named FIFO queues."""

    event_prefix = "queue"

    @abstractmethod
    async def enqueue(self, item: Any, queue: str = DEFAULT_QUEUE) -> None:
        """Append ``item`` to the tail of ``queue``."""

    @abstractmethod
    async def dequeue(self, queue: str = DEFAULT_QUEUE) -> Any:
        """Remove and return the head of ``queue``, or None if it is empty."""

    @abstractmethod
    async def size(self, queue: str = DEFAULT_QUEUE) -> int:
        """Number of items waiting in ``queue``."""

    @abstractmethod
    async def peek(self, queue: str = DEFAULT_QUEUE) -> Any:
        """Return the head of ``queue`` without removing it, or None."""

    @abstractmethod
    async def clear(self, queue: str = DEFAULT_QUEUE) -> int:
        """Empty ``queue`` and return how many items were dropped."""

    @abstractmethod
    async def list_queues(self) -> list[str]:
        """Names of all known queues."""
