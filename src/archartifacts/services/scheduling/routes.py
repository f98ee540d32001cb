"""
HTTP routes for the scheduling capability.

    POST   /api/scheduling/schedule        body: {"task": str, "cron": str | number} → "OK"
    DELETE /api/scheduling/cancel/{task}                                           → "OK"
    GET    /api/scheduling/stats                                                   → JSON stats
    GET    /api/scheduling/status                                                  → "scheduling api running"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response

from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import RequestValidationError
from archartifacts.services.http import (
    add_status_route,
    bad_request,
    is_blank,
    mount_router,
    provider_source,
    read_json_object,
    respond_json,
    respond_ok,
)
from archartifacts.services.scheduling.provider import SchedulerProvider


MISSING_SCHEDULE_MESSAGE = "Bad Request: Missing task or cron expression"


def build_scheduler_router(
    current_scheduler: Callable[[], SchedulerProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["scheduling"])

    @router.post("/api/scheduling/schedule")
    async def schedule(request: Request) -> Response:
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        task, cron = body.get("task"), body.get("cron")
        if is_blank(task) or is_blank(cron):
            return bad_request(MISSING_SCHEDULE_MESSAGE)
        return await respond_ok(current_scheduler().start(str(task), cron))

    @router.delete("/api/scheduling/cancel/{task}")
    async def cancel(task: str) -> Response:
        return await respond_ok(current_scheduler().cancel(task))

    @router.get("/api/scheduling/stats")
    async def stats() -> Response:
        scheduler = current_scheduler()

        async def _stats() -> list[dict[str, Any]]:
            return scheduler.get_schedule_stats()

        return await respond_json(_stats())

    add_status_route(router, Capability.SCHEDULING.value, emitter)
    return router


def register_scheduler_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    scheduler: SchedulerProvider,
) -> Optional[APIRouter]:
    """Mount the scheduling routes on ``options["app"]`` if one was given."""
    router = build_scheduler_router(provider_source(options, scheduler), emitter)
    return router if mount_router(options, router, Capability.SCHEDULING.value) else None
