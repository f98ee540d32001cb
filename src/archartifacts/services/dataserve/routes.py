"""
HTTP routes for the dataserve capability.

    POST   /api/dataserve/container/{name}                           → "OK" | 500 if it exists
    DELETE /api/dataserve/container/{name}                           → "OK" | 404
    POST   /api/dataserve/add/{container}       body: any JSON value → JSON key
    DELETE /api/dataserve/remove/{container}/{key}                   → "OK" | 404
    GET    /api/dataserve/find/{container}/{term}                    → JSON results
    GET    /api/dataserve/status                                     → "dataserve api running"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import RequestValidationError
from archartifacts.services.dataserve.base import DataServeProvider
from archartifacts.services.http import (
    add_status_route,
    bad_request,
    is_missing,
    mount_router,
    provider_source,
    read_json_body,
    respond_json,
    respond_ok,
    server_error,
)


MISSING_DOCUMENT_MESSAGE = "Bad Request: Missing document"
CONTAINER_NOT_FOUND_MESSAGE = "Not Found: Container not found."
KEY_NOT_FOUND_MESSAGE = "Not Found: Key not found."


def build_dataserve_router(
    current_store: Callable[[], DataServeProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["dataserve"])

    @router.post("/api/dataserve/container/{name}")
    async def create_container(name: str) -> Response:
        return await respond_ok(current_store().create_container(name))

    @router.delete("/api/dataserve/container/{name}")
    async def delete_container(name: str) -> Response:
        store = current_store()
        try:
            deleted = await store.delete_container(name)
        except Exception as exc:
            return server_error(exc)
        if not deleted:
            return PlainTextResponse(CONTAINER_NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse("OK")

    @router.post("/api/dataserve/add/{container}")
    async def add(container: str, request: Request) -> Response:
        try:
            document = await read_json_body(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        if is_missing(document):
            return bad_request(MISSING_DOCUMENT_MESSAGE)
        return await respond_json(current_store().add(container, document))

    @router.delete("/api/dataserve/remove/{container}/{key}")
    async def remove(container: str, key: str) -> Response:
        store = current_store()
        try:
            removed = await store.remove(container, key)
        except Exception as exc:
            return server_error(exc)
        if not removed:
            return PlainTextResponse(KEY_NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse("OK")

    @router.get("/api/dataserve/find/{container}/{term}")
    async def find(container: str, term: str) -> Response:
        return await respond_json(current_store().find(container, term))

    add_status_route(router, Capability.DATASERVE.value, emitter)
    return router


def register_dataserve_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    provider: DataServeProvider,
) -> Optional[APIRouter]:
    """Mount the dataserve routes on ``options["app"]`` if one was given."""
    router = build_dataserve_router(provider_source(options, provider), emitter)
    return router if mount_router(options, router, Capability.DATASERVE.value) else None
