"""
HTTP routes for the searching capability.

    POST   /api/searching/add            body: {"key"?: str, "document": any} → "OK"
    DELETE /api/searching/delete/{key}                                        → "OK" | 404
    GET    /api/searching/search/{term}                                       → JSON results
    GET    /api/searching/status                                              → "searching api running"

A missing ``key`` in the add body gets a generated UUID.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import RequestValidationError
from archartifacts.services.http import (
    add_status_route,
    bad_request,
    is_missing,
    mount_router,
    provider_source,
    read_json_object,
    respond_json,
    server_error,
)
from archartifacts.services.searching.provider import SearchProvider


MISSING_DOCUMENT_MESSAGE = "Bad Request: Missing document"
DUPLICATE_KEY_MESSAGE = "Bad Request: Key already exists."
KEY_NOT_FOUND_MESSAGE = "Not Found: Key not found."


def build_search_router(
    current_index: Callable[[], SearchProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["searching"])

    @router.post("/api/searching/add")
    async def add(request: Request) -> Response:
        index = current_index()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        document = body.get("document")
        if is_missing(document):
            return bad_request(MISSING_DOCUMENT_MESSAGE)
        key = body.get("key") or str(uuid.uuid4())

        try:
            added = await index.add(str(key), document)
        except Exception as exc:
            return server_error(exc)
        if not added:
            return bad_request(DUPLICATE_KEY_MESSAGE)
        return PlainTextResponse("OK")

    @router.delete("/api/searching/delete/{key}")
    async def delete(key: str) -> Response:
        index = current_index()
        try:
            removed = await index.remove(key)
        except Exception as exc:
            return server_error(exc)
        if not removed:
            return PlainTextResponse(KEY_NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse("OK")

    @router.get("/api/searching/search/{term}")
    async def search(term: str) -> Response:
        return await respond_json(current_index().search(term))

    add_status_route(router, Capability.SEARCHING.value, emitter)
    return router


def register_search_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    index: SearchProvider,
) -> Optional[APIRouter]:
    """Mount the searching routes on ``options["app"]`` if one was given."""
    router = build_search_router(provider_source(options, index), emitter)
    return router if mount_router(options, router, Capability.SEARCHING.value) else None
