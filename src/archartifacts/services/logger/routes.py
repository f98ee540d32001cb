"""
HTTP routes for the logging capability.

    POST /api/logging/log     body: {"logname"?: str, "message": any} or a bare string → "OK"
    GET  /api/logging/status                                                          → "logging api running"
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
    read_json_body,
    respond_ok,
)
from archartifacts.services.logger.base import DEFAULT_LOGNAME, LoggerProvider


MISSING_MESSAGE = "Bad Request: Missing message"


def build_logger_router(
    current_logger: Callable[[], LoggerProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["logging"])

    @router.post("/api/logging/log")
    async def log(request: Request) -> Response:
        try:
            body = await read_json_body(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)

        if isinstance(body, dict):
            logname = body.get("logname") or DEFAULT_LOGNAME
            message = body.get("message")
        else:
            logname, message = DEFAULT_LOGNAME, body

        if is_blank(message):
            return bad_request(MISSING_MESSAGE)
        return await respond_ok(current_logger().log(str(logname), message))

    add_status_route(router, Capability.LOGGING.value, emitter)
    return router


def register_logger_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    provider: LoggerProvider,
) -> Optional[APIRouter]:
    """Mount the logging routes on ``options["app"]`` if one was given."""
    router = build_logger_router(provider_source(options, provider), emitter)
    return router if mount_router(options, router, Capability.LOGGING.value) else None
