"""Queueing capability: named FIFO queues in memory or Redis."""

from archartifacts.services.queueing.base import DEFAULT_QUEUE, QueueProvider
from archartifacts.services.queueing.factory import create_queue
from archartifacts.services.queueing.memory import MemoryQueue
from archartifacts.services.queueing.routes import build_queue_router, register_queue_routes
from archartifacts.services.queueing.singleton import QueueService

__all__ = [
    "DEFAULT_QUEUE",
    "MemoryQueue",
    "QueueProvider",
    "QueueService",
    "build_queue_router",
    "create_queue",
    "register_queue_routes",
]
