"""
archartifacts.services.scheduling.provider - Recurring Task Scheduler
=======================================================================

Runs named jobs repeatedly on the event loop. One ``asyncio.Task`` drives
each scheduled job.

Schedule Forms:
    ┌──────────────────────┬───────────────────────────────────────────────┐
    │ schedule             │ behaviour                                     │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ int | float (secs)   │ runs once inside start(), then every N secs   │
    │ str (cron text)      │ first run after 60 secs, then every 60 secs   │
    └──────────────────────┴───────────────────────────────────────────────┘

    Cron strings are stored and reported but their fields are not
    interpreted. The 60 second period can be changed with the
    ``cron_interval_seconds`` option.

Execution:
    A job is a sync or async callable taking no arguments. Without a job,
    executions are only counted. A job that raises is reported with status
    ``failed`` and the schedule keeps running.

Events (only when an emitter was supplied):
    scheduler:started        {task_name, schedule}
    scheduler:start:error    {task_name, error}       duplicate task name
    scheduler:taskExecuted   {task_name, status, data}
    scheduler:stopped        {task_name}

Statistics:
    One record per task name, kept after the task stops. At most 100
    records; the one with the oldest activity is evicted first.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import math
from collections import OrderedDict
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

import structlog

from archartifacts.core.enums import ExecutionStatus
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ProviderError
from archartifacts.services.base import Provider


logger = structlog.get_logger()

Schedule = Union[int, float, str]
Job = Callable[[], Any]

DEFAULT_CRON_INTERVAL_SECONDS = 60.0
MAX_SCHEDULE_STATS = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SchedulerProvider(Provider):
    """In-process scheduler for recurring jobs.

    Options:
        cron_interval_seconds: Period used for cron-string schedules.
        max_schedule_stats: Bound on retained statistics records.

    Example:
        >>> scheduler = SchedulerProvider()
        >>> await scheduler.start("heartbeat", 30, job=send_heartbeat)
        >>> await scheduler.is_running("heartbeat")
        True
        >>> await scheduler.cancel("heartbeat")
    """

    event_prefix = "scheduler"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._cron_interval = float(
            self._options.get("cron_interval_seconds", DEFAULT_CRON_INTERVAL_SECONDS)
        )
        self._max_stats = int(self._options.get("max_schedule_stats", MAX_SCHEDULE_STATS))
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._stats: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._logger = logger.bind(component="scheduler")

    # =========================================================================
    # Public API
    # =========================================================================

    async def start(self, task_name: str, schedule: Schedule, job: Optional[Job] = None) -> None:
        """Schedule ``job`` under ``task_name``.

        Starting a name that is already scheduled emits
        ``scheduler:start:error`` and changes nothing.

        Raises:
            ProviderError: If a numeric interval is not a positive finite
                number.
        """
        if task_name in self._tasks:
            self._logger.warning("task_already_scheduled", task_name=task_name)
            self._emit("start:error", task_name=task_name, error="Task already scheduled.")
            return

        # --- Resolve the period and whether to run right away ---
        if isinstance(schedule, str):
            interval = self._cron_interval
            run_immediately = False
        else:
            interval = float(schedule)
            if not math.isfinite(interval) or interval <= 0:
                raise ProviderError(
                    message=f"Schedule interval must be a positive number, got {schedule}",
                    error_code="INVALID_SCHEDULE",
                    details={"task_name": task_name, "schedule": schedule},
                )
            run_immediately = True

        self._init_stats(task_name, schedule, interval)

        # --- Register before the first run so a re-entrant start() sees it ---
        loop_task = asyncio.create_task(
            self._run_loop(task_name, interval, job),
            name=f"schedule:{task_name}",
        )
        self._tasks[task_name] = loop_task

        if run_immediately:
            await self._execute(task_name, job, interval)

        self._logger.info("task_scheduled", task_name=task_name, schedule=schedule)
        self._emit("started", task_name=task_name, schedule=schedule)

    async def stop(self, task_name: Optional[str] = None) -> None:
        """Stop one task, or every task when ``task_name`` is None.

        Stopping an unknown task is a no-op. Statistics are kept.
        """
        names = [task_name] if task_name is not None else list(self._tasks)
        for name in names:
            loop_task = self._tasks.pop(name, None)
            if loop_task is None:
                continue
            loop_task.cancel()
            if loop_task is not asyncio.current_task():
                with contextlib.suppress(asyncio.CancelledError):
                    await loop_task
            self._logger.info("task_stopped", task_name=name)
            self._emit("stopped", task_name=name)

    async def cancel(self, task_name: str) -> None:
        """Alias of ``stop(task_name)`` used by the HTTP cancel route."""
        await self.stop(task_name)

    async def is_running(self, task_name: Optional[str] = None) -> bool:
        """Whether ``task_name`` (or, with None, any task) is scheduled."""
        if task_name is not None:
            return task_name in self._tasks
        return bool(self._tasks)

    def get_schedule_stats(self) -> list[dict[str, Any]]:
        """Statistics records, most recent activity first."""
        return [dict(stats) for stats in reversed(self._stats.values())]

    async def close(self) -> None:
        await self.stop()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run_loop(self, task_name: str, interval: float, job: Optional[Job]) -> None:
        # The immediate run, if any, happens in start(); this loop only
        # handles the periodic ones.
        while True:
            await asyncio.sleep(interval)
            await self._execute(task_name, job, interval)

    async def _execute(self, task_name: str, job: Optional[Job], interval: float) -> None:
        self._record_run(task_name, interval)
        if job is None:
            status = ExecutionStatus.COMPLETED
            data: Any = {"executed_at": _now().isoformat()}
        else:
            try:
                result = job()
                if inspect.isawaitable(result):
                    result = await result
                status = ExecutionStatus.COMPLETED
                data = result
            except Exception as exc:
                self._logger.warning("scheduled_job_failed", task_name=task_name, error=str(exc))
                status = ExecutionStatus.FAILED
                data = {"error": str(exc)}

        self._emit("taskExecuted", task_name=task_name, status=status.value, data=data)

    def _init_stats(self, task_name: str, schedule: Schedule, interval: float) -> None:
        now = _now()
        self._stats[task_name] = {
            "schedulename": task_name,
            "executions": 0,
            "last_run": None,
            "next_run": (now + timedelta(seconds=interval)).isoformat(),
            "schedule": schedule,
            "created": now.isoformat(),
        }
        self._stats.move_to_end(task_name)
        while len(self._stats) > self._max_stats:
            self._stats.popitem(last=False)

    def _record_run(self, task_name: str, interval: float) -> None:
        stats = self._stats.get(task_name)
        if stats is None:
            return
        now = _now()
        stats["executions"] += 1
        stats["last_run"] = now.isoformat()
        stats["next_run"] = (now + timedelta(seconds=interval)).isoformat()
        self._stats.move_to_end(task_name)
