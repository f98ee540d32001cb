"""
HTTP routes for the caching capability.

    POST   /api/caching/put/{key}      body: any JSON value   → "OK"
    GET    /api/caching/get/{key}                             → JSON value | null
    DELETE /api/caching/delete/{key}                          → "OK"
    GET    /api/caching/stats                                 → JSON key stats
    GET    /api/caching/status                                → "caching api running"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response

from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import RequestValidationError
from archartifacts.services.caching.base import CacheProvider
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


MISSING_VALUE_MESSAGE = "Bad Request: Missing value"


def build_cache_router(
    current_cache: Callable[[], CacheProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    """Build the caching router without mounting it.

    ``current_cache`` is called on every request to reach the provider.
    """
    router = APIRouter(tags=["caching"])

    @router.post("/api/caching/put/{key}")
    async def put(key: str, request: Request) -> Response:
        try:
            value = await read_json_body(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        if is_missing(value):
            return bad_request(MISSING_VALUE_MESSAGE)
        return await respond_ok(current_cache().put(key, value))

    @router.get("/api/caching/get/{key}")
    async def get(key: str) -> Response:
        return await respond_json(current_cache().get(key))

    @router.delete("/api/caching/delete/{key}")
    async def delete(key: str) -> Response:
        return await respond_ok(current_cache().delete(key))

    @router.get("/api/caching/stats")
    async def stats() -> Response:
        cache = current_cache()

        async def _stats() -> list[dict[str, Any]]:
            return cache.get_key_stats()

        return await respond_json(_stats())

    add_status_route(router, Capability.CACHING.value, emitter)
    return router


def register_cache_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    cache: CacheProvider,
) -> Optional[APIRouter]:
    """Mount the caching routes on ``options["app"]`` if one was given.

    Returns:
        The mounted router, or None when there was no app to mount on.
    """
    router = build_cache_router(provider_source(options, cache), emitter)
    return router if mount_router(options, router, Capability.CACHING.value) else None
