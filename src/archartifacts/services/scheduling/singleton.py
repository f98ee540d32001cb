"""Process-shared scheduler service."""

from __future__ import annotations

from typing import Any, Optional

from archartifacts.services.scheduling.factory import create_scheduler
from archartifacts.services.scheduling.provider import Job, Schedule, SchedulerProvider
from archartifacts.services.singleton import ServiceSingleton


class SchedulerService(ServiceSingleton[SchedulerProvider]):
    """Singleton wrapper around the scheduler."""

    def __init__(self) -> None:
        super().__init__("Scheduling", create_scheduler)

    async def start(self, task_name: str, schedule: Schedule, job: Optional[Job] = None) -> None:
        await self.get_instance().start(task_name, schedule, job)

    async def stop(self, task_name: Optional[str] = None) -> None:
        await self.get_instance().stop(task_name)

    async def cancel(self, task_name: str) -> None:
        await self.get_instance().cancel(task_name)

    async def is_running(self, task_name: Optional[str] = None) -> bool:
        return await self.get_instance().is_running(task_name)

    def get_schedule_stats(self) -> list[dict[str, Any]]:
        return self.get_instance().get_schedule_stats()
