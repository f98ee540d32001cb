"""Scheduling capability: recurring jobs driven by asyncio tasks."""

from archartifacts.services.scheduling.factory import create_scheduler
from archartifacts.services.scheduling.provider import SchedulerProvider
from archartifacts.services.scheduling.routes import (
    build_scheduler_router,
    register_scheduler_routes,
)
from archartifacts.services.scheduling.singleton import SchedulerService

__all__ = [
    "SchedulerProvider",
    "SchedulerService",
    "build_scheduler_router",
    "create_scheduler",
    "register_scheduler_routes",
]
