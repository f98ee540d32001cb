"""
HTTP routes for the measuring capability.

    POST /api/measuring/add                           body: {"metric": str, "value": number} → "OK"
    GET  /api/measuring/list/{metric}/{start}/{end}                                         → JSON measures
    GET  /api/measuring/total/{metric}/{start}/{end}                                        → JSON number
    GET  /api/measuring/average/{metric}/{start}/{end}                                      → JSON number
    GET  /api/measuring/status                                                              → "measuring api running"

``start`` and ``end`` are ISO-8601 dates or datetimes (``2024-06-01``,
``2024-06-01T12:00:00Z``).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response
from pydantic import TypeAdapter, ValidationError

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
from archartifacts.services.measuring.provider import MeasuringProvider


MISSING_MEASURE_MESSAGE = "Bad Request: Missing metric or value"
INVALID_RANGE_MESSAGE = "Bad Request: Invalid date range"

_datetime_adapter = TypeAdapter(datetime)


def parse_moment(raw: str) -> datetime:
    """Parse an ISO-8601 date or datetime from a path segment.

    Raises:
        RequestValidationError: If ``raw`` is not a recognisable date.
    """
    try:
        return _datetime_adapter.validate_python(raw)
    except ValidationError as exc:
        raise RequestValidationError(
            message=INVALID_RANGE_MESSAGE,
            error_code="INVALID_DATE",
            details={"value": raw},
        ) from exc


def build_measuring_router(
    current_metrics: Callable[[], MeasuringProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["measuring"])

    @router.post("/api/measuring/add")
    async def add(request: Request) -> Response:
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        metric, value = body.get("metric"), body.get("value")
        numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
        if is_blank(metric) or not numeric:
            return bad_request(MISSING_MEASURE_MESSAGE)
        return await respond_ok(current_metrics().add(str(metric), value))

    async def _ranged(
        query: Callable[[str, datetime, datetime], Awaitable[Any]],
        metric: str,
        start: str,
        end: str,
    ) -> Response:
        try:
            start_at, end_at = parse_moment(start), parse_moment(end)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        return await respond_json(query(metric, start_at, end_at))

    @router.get("/api/measuring/list/{metric}/{start}/{end}")
    async def list_measures(metric: str, start: str, end: str) -> Response:
        return await _ranged(current_metrics().list, metric, start, end)

    @router.get("/api/measuring/total/{metric}/{start}/{end}")
    async def total(metric: str, start: str, end: str) -> Response:
        return await _ranged(current_metrics().total, metric, start, end)

    @router.get("/api/measuring/average/{metric}/{start}/{end}")
    async def average(metric: str, start: str, end: str) -> Response:
        return await _ranged(current_metrics().average, metric, start, end)

    add_status_route(router, Capability.MEASURING.value, emitter)
    return router


def register_measuring_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    metrics: MeasuringProvider,
) -> Optional[APIRouter]:
    """Mount the measuring routes on ``options["app"]`` if one was given."""
    router = build_measuring_router(provider_source(options, metrics), emitter)
    return router if mount_router(options, router, Capability.MEASURING.value) else None
