"""Process-shared workflow service."""

from __future__ import annotations

from typing import Any, Optional

from archartifacts.services.singleton import ServiceSingleton
from archartifacts.services.workflow.factory import create_workflow
from archartifacts.services.workflow.provider import (
    StatusCallback,
    StepFunction,
    WorkflowProvider,
)


class WorkflowService(ServiceSingleton[WorkflowProvider]):
    """Singleton wrapper around the workflow engine."""

    def __init__(self) -> None:
        super().__init__("Workflow", create_workflow)

    def register_step(self, name: str, fn: StepFunction) -> None:
        self.get_instance().register_step(name, fn)

    async def define_workflow(self, name: str, steps: list[str]) -> str:
        return await self.get_instance().define_workflow(name, steps)

    async def run_workflow(
        self,
        name: str,
        data: Any = None,
        status_callback: Optional[StatusCallback] = None,
    ) -> Any:
        return await self.get_instance().run_workflow(name, data, status_callback)
