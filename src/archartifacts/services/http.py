"""
archartifacts.services.http - Route Adaptation Helpers
========================================================

Every capability's routes module translates HTTP requests into exactly one
provider call and maps the outcome with the same rule:

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │ Outcome                      │ Response                             │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │ mutating op resolves         │ 200 text/plain "OK"                  │
    │ read op resolves             │ 200 application/json <value>         │
    │ required field missing       │ 400 text/plain <fixed message>       │
    │ provider raises              │ 500 text/plain str(exception)        │
    └──────────────────────────────┴──────────────────────────────────────┘

The validation check runs before the provider coroutine is even created,
so a 400 never touches the backing store. There are no retries.

Route handlers reach their provider through a zero-argument source called
on every request. When a ServiceSingleton drives the factory, the source
is the singleton's ``get_instance``, so a reset and re-initialize is seen
by routes that were mounted earlier; a request that arrives while the
singleton is uninitialized is answered ``503``.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import RequestValidationError, ServiceNotInitializedError


logger = structlog.get_logger()

# Sentinel for "request had no body at all", distinct from a JSON null.
MISSING: Any = object()


ProviderT = TypeVar("ProviderT")


def is_missing(value: Any) -> bool:
    """A required value counts as missing when absent or JSON null.

    Falsy values (``""``, ``0``, ``false``, ``[]``) are real values.
    """
    return value is MISSING or value is None


def is_blank(value: Any) -> bool:
    """A required name field is also missing when it is empty text."""
    return is_missing(value) or value == ""


def bad_request(message: str) -> PlainTextResponse:
    """Build the ``400`` response for a missing required field."""
    return PlainTextResponse(message, status_code=400)


def server_error(exc: BaseException) -> PlainTextResponse:
    """Build the ``500`` response carrying the exception's message."""
    return PlainTextResponse(str(exc), status_code=500)


async def respond_ok(operation: Awaitable[Any]) -> Response:
    """Await a mutating provider call and answer ``200 "OK"`` or ``500``."""
    try:
        await operation
    except RequestValidationError as exc:
        return bad_request(exc.message)
    except Exception as exc:
        logger.warning("route_operation_failed", error=str(exc), error_type=type(exc).__name__)
        return server_error(exc)
    return PlainTextResponse("OK", status_code=200)


async def respond_json(operation: Awaitable[Any]) -> Response:
    """Await a read provider call and answer ``200 <json>`` or ``500``."""
    try:
        value = await operation
    except RequestValidationError as exc:
        return bad_request(exc.message)
    except Exception as exc:
        logger.warning("route_operation_failed", error=str(exc), error_type=type(exc).__name__)
        return server_error(exc)
    return JSONResponse(jsonable_encoder(value), status_code=200)


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON.

    Returns:
        The decoded value, or ``MISSING`` when the body is empty.

    Raises:
        RequestValidationError: If the body is present but not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return MISSING
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            message="Bad Request: Body must be valid JSON",
            error_code="INVALID_JSON",
        ) from exc


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object; anything else becomes ``{}``."""
    body = await read_json_body(request)
    return body if isinstance(body, dict) else {}


def add_status_route(
    router: APIRouter,
    capability: str,
    emitter: Optional[EventEmitter],
) -> None:
    """Bind ``GET /api/<capability>/status``.

    The route never consults the provider. It always answers
    ``"<capability> api running"`` and emits ``api-<capability>-status``.
    """
    message = f"{capability} api running"

    @router.get(f"/api/{capability}/status")
    async def status() -> JSONResponse:
        if emitter is not None:
            emitter.emit(f"api-{capability}-status", {"message": message})
        return JSONResponse(message, status_code=200)


def provider_source(options: dict[str, Any], provider: ProviderT) -> Callable[[], ProviderT]:
    """Return the callable route handlers use to reach their provider.

    ``options["service"]`` is set by ServiceSingleton.initialize(); without
    it the routes stay bound to ``provider``.
    """
    service = options.get("service")
    if service is not None:
        return service.get_instance
    return lambda: provider


def mount_router(
    options: dict[str, Any],
    router: APIRouter,
    capability: Optional[str] = None,
) -> bool:
    """Include ``router`` into ``options["app"]`` when an app was supplied.

    With ``capability`` given, the router is included at most once per app.
    A later call for the same capability leaves the first router in place;
    its handlers already resolve the provider on every request.

    Returns:
        True if the app serves the capability's routes.
    """
    app = options.get("app")
    if not isinstance(app, FastAPI):
        return False
    if capability is None:
        app.include_router(router)
        return True

    mounted: Optional[set[str]] = getattr(app.state, "mounted_capabilities", None)
    if mounted is None:
        mounted = set()
        app.state.mounted_capabilities = mounted
        app.add_exception_handler(ServiceNotInitializedError, _service_unavailable)
    if capability in mounted:
        logger.debug("routes_already_mounted", capability=capability)
        return True
    app.include_router(router)
    mounted.add(capability)
    return True


async def _service_unavailable(request: Request, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=503)
