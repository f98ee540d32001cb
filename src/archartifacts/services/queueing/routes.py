"""
HTTP routes for the queueing capability.

    POST /api/queueing/enqueue/{queue}   body: any JSON value  → "OK"
    GET  /api/queueing/dequeue/{queue}                         → JSON item | null
    GET  /api/queueing/size/{queue}                            → JSON int
    GET  /api/queueing/status                                  → "queueing api running"
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
    is_missing,
    mount_router,
    provider_source,
    read_json_body,
    respond_json,
    respond_ok,
)
from archartifacts.services.queueing.base import QueueProvider


MISSING_ITEM_MESSAGE = "Bad Request: Missing queue name or value"


def build_queue_router(
    current_queue: Callable[[], QueueProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["queueing"])

    @router.post("/api/queueing/enqueue/{queue_name}")
    async def enqueue(queue_name: str, request: Request) -> Response:
        try:
            item = await read_json_body(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        if is_missing(item):
            return bad_request(MISSING_ITEM_MESSAGE)
        return await respond_ok(current_queue().enqueue(item, queue_name))

    @router.get("/api/queueing/dequeue/{queue_name}")
    async def dequeue(queue_name: str) -> Response:
        return await respond_json(current_queue().dequeue(queue_name))

    @router.get("/api/queueing/size/{queue_name}")
    async def size(queue_name: str) -> Response:
        return await respond_json(current_queue().size(queue_name))

    add_status_route(router, Capability.QUEUEING.value, emitter)
    return router


def register_queue_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    queue: QueueProvider,
) -> Optional[APIRouter]:
    """Mount the queueing routes on ``options["app"]`` if one was given."""
    router = build_queue_router(provider_source(options, queue), emitter)
    return router if mount_router(options, router, Capability.QUEUEING.value) else None
