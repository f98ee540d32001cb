"""
archartifacts.services.workflow.provider - Sequential Step Pipelines
======================================================================

A workflow is an ordered list of step names. Steps are plain functions
registered in a step table; running a workflow threads one value through
them in order:

    data ──→ [validate] ──→ [enrich] ──→ [publish] ──→ result
               step 1         step 2       step 3

    run_workflow("publish-adr", {"title": "Use Redis"})

Step Table:
    ``register_step(name, fn)`` binds a name to a sync or async callable
    taking the previous step's output and returning the next input. Steps
    may also be pre-registered through ``options["steps"]`` (a mapping of
    name to callable). Workflows can only reference registered names;
    nothing is imported by path at run time.

Progress Reporting:
    Each run reports to both the emitter and an optional status callback:

    ┌──────────────────────┬─────────────────────────┬──────────────────────┐
    │ moment               │ event                   │ callback status      │
    ├──────────────────────┼─────────────────────────┼──────────────────────┤
    │ run begins           │ workflow:start          │                      │
    │ before each step     │ workflow:step:start     │ step_start           │
    │ after each step      │ workflow:step:end       │ step_end             │
    │ step raised          │ workflow:step:error     │ step_error           │
    │ all steps done       │ workflow:complete       │ workflow_complete    │
    │ unknown workflow     │ workflow:error          │                      │
    └──────────────────────┴─────────────────────────┴──────────────────────┘

    A failing step stops the run and surfaces as WorkflowError.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Optional

import structlog

from archartifacts.core.enums import WorkflowStatus
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import WorkflowError
from archartifacts.services.base import Provider


logger = structlog.get_logger()

StepFunction = Callable[[Any], Any]
StatusCallback = Callable[[dict[str, Any]], Any]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class WorkflowProvider(Provider):
    """Registry of steps and workflows, plus the sequential runner.

    Example:
        >>> engine = WorkflowProvider()
        >>> engine.register_step("double", lambda n: n * 2)
        >>> engine.register_step("inc", lambda n: n + 1)
        >>> await engine.define_workflow("calc", ["double", "inc"])
        'calc'
        >>> await engine.run_workflow("calc", 5)
        11
    """

    event_prefix = "workflow"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._steps: dict[str, StepFunction] = {}
        self._workflows: dict[str, list[str]] = {}
        self._logger = logger.bind(component="workflow")

        for name, fn in dict(self._options.get("steps") or {}).items():
            self.register_step(name, fn)

    # =========================================================================
    # Step table
    # =========================================================================

    def register_step(self, name: str, fn: StepFunction) -> None:
        """Bind ``name`` to ``fn``. Re-registering a name replaces it.

        Raises:
            TypeError: If ``fn`` is not callable.
        """
        if not callable(fn):
            raise TypeError(f"Step '{name}' must be callable, got {type(fn).__name__}")
        self._steps[name] = fn
        self._logger.debug("step_registered", step_name=name)

    def list_steps(self) -> list[str]:
        return sorted(self._steps)

    # =========================================================================
    # Workflows
    # =========================================================================

    async def define_workflow(self, name: str, steps: list[str]) -> str:
        """Store (or replace) ``name`` as the given sequence of steps.

        Returns:
            The workflow name, which doubles as its id.

        Raises:
            WorkflowError: If a step name is not registered.
        """
        unknown = [step for step in steps if step not in self._steps]
        if unknown:
            raise WorkflowError(
                message=f"Unknown steps for workflow '{name}': {', '.join(unknown)}",
                workflow_name=name,
                error_code="UNKNOWN_STEP",
                details={"unknown_steps": unknown},
            )
        self._workflows[name] = list(steps)
        self._emit("defined", workflow_name=name, steps=list(steps))
        return name

    def get_workflow(self, name: str) -> Optional[list[str]]:
        steps = self._workflows.get(name)
        return list(steps) if steps is not None else None

    def list_workflows(self) -> list[str]:
        return sorted(self._workflows)

    async def run_workflow(
        self,
        name: str,
        data: Any = None,
        status_callback: Optional[StatusCallback] = None,
    ) -> Any:
        """Run the steps of ``name`` in order and return the final value.

        Args:
            name: A defined workflow.
            data: Input to the first step.
            status_callback: Optional sync or async callable receiving a
                progress dict (``{"status": "step_start", ...}``).

        Raises:
            WorkflowError: For an unknown workflow or a failing step. The
                step's own exception is chained as ``__cause__``.
        """
        steps = self._workflows.get(name)
        if steps is None:
            message = f"Workflow '{name}' not found."
            self._emit("error", workflow_name=name, error=message)
            raise WorkflowError(
                message=message,
                workflow_name=name,
                error_code="WORKFLOW_NOT_FOUND",
            )

        self._logger.info("workflow_started", workflow_name=name, steps=len(steps))
        self._emit("start", workflow_name=name, initial_data=data)

        current = data
        for index, step_name in enumerate(steps, start=1):
            step = self._steps[step_name]
            await self._report(
                status_callback,
                status=WorkflowStatus.STEP_START,
                step_name=step_name,
                step_index=index,
                data=current,
            )
            self._emit("step:start", workflow_name=name, step_name=step_name, data=current)

            # --- Run the step; any exception ends the workflow ---
            try:
                current = await _maybe_await(step(current))
            except Exception as exc:
                self._logger.warning(
                    "workflow_step_failed",
                    workflow_name=name,
                    step_name=step_name,
                    error=str(exc),
                )
                await self._report(
                    status_callback,
                    status=WorkflowStatus.STEP_ERROR,
                    step_name=step_name,
                    step_index=index,
                    error=str(exc),
                )
                self._emit("step:error", workflow_name=name, step_name=step_name, error=str(exc))
                raise WorkflowError(
                    message=f"Step '{step_name}' failed in workflow '{name}': {exc}",
                    workflow_name=name,
                    step_name=step_name,
                    error_code="STEP_FAILED",
                ) from exc

            await self._report(
                status_callback,
                status=WorkflowStatus.STEP_END,
                step_name=step_name,
                step_index=index,
                data=current,
            )
            self._emit("step:end", workflow_name=name, step_name=step_name, data=current)

        await self._report(
            status_callback,
            status=WorkflowStatus.WORKFLOW_COMPLETE,
            workflow_name=name,
            final_data=current,
        )
        self._emit("complete", workflow_name=name, final_data=current)
        self._logger.info("workflow_completed", workflow_name=name)
        return current

    async def _report(
        self,
        callback: Optional[StatusCallback],
        status: WorkflowStatus,
        **fields: Any,
    ) -> None:
        if callback is None:
            return
        await _maybe_await(callback({"status": status.value, **fields}))
