"""
HTTP routes for the filing capability.

    POST   /api/filing/upload/{path}     body: JSON string or value  → "OK"
    GET    /api/filing/download/{path}                               → JSON string | 404
    DELETE /api/filing/remove/{path}                                 → "OK" | 404
    GET    /api/filing/list?path=docs                                → JSON entry names
    GET    /api/filing/status                                        → "filing api running"

``{path}`` may contain slashes (``docs/adr-1.md``). An uploaded JSON string
is written as-is; any other JSON value is written as its JSON text. An
empty string makes an empty file.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ProviderError, RequestValidationError
from archartifacts.services.filing.base import FilingProvider
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


MISSING_CONTENT_MESSAGE = "Bad Request: Missing content"
FILE_NOT_FOUND_MESSAGE = "Not Found: File not found."


def build_filing_router(
    current_filing: Callable[[], FilingProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["filing"])

    @router.post("/api/filing/upload/{path:path}")
    async def upload(path: str, request: Request) -> Response:
        try:
            body = await read_json_body(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        if is_missing(body):
            return bad_request(MISSING_CONTENT_MESSAGE)
        content = body if isinstance(body, str) else json.dumps(body, indent=2)
        return await respond_ok(current_filing().upload(path, content))

    @router.get("/api/filing/download/{path:path}")
    async def download(path: str) -> Response:
        filing = current_filing()
        try:
            content = await filing.download(path)
        except ProviderError as exc:
            if exc.error_code == "FILE_NOT_FOUND":
                return PlainTextResponse(FILE_NOT_FOUND_MESSAGE, status_code=404)
            return server_error(exc)
        except Exception as exc:
            return server_error(exc)
        return JSONResponse(content)

    @router.delete("/api/filing/remove/{path:path}")
    async def remove(path: str) -> Response:
        filing = current_filing()
        try:
            removed = await filing.remove(path)
        except Exception as exc:
            return server_error(exc)
        if not removed:
            return PlainTextResponse(FILE_NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse("OK")

    @router.get("/api/filing/list")
    async def list_entries(path: str = "") -> Response:
        return await respond_json(current_filing().list(path))

    add_status_route(router, Capability.FILING.value, emitter)
    return router


def register_filing_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    filing: FilingProvider,
) -> Optional[APIRouter]:
    """Mount the filing routes on ``options["app"]`` if one was given."""
    router = build_filing_router(provider_source(options, filing), emitter)
    return router if mount_router(options, router, Capability.FILING.value) else None
