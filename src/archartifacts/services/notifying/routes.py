"""
HTTP routes for the notifying capability.

    POST /api/notifying/topic                      body: {"topic": str}        → "OK"
    POST /api/notifying/subscribe/topic/{topic}    body: {"callbackUrl": str}  → "OK"
    POST /api/notifying/unsubscribe/topic/{topic}  body: {"callbackUrl": str}  → "OK" | 404
    POST /api/notifying/notify/topic/{topic}       body: {"message": any}      → {"delivered": n}
    GET  /api/notifying/status                                                 → "notifying api running"

HTTP subscribers are webhooks: each notification is POSTed to the
``callbackUrl`` as ``{"topic": ..., "message": ...}``.
"""

from __future__ import annotations

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
    is_blank,
    is_missing,
    mount_router,
    provider_source,
    read_json_object,
    respond_json,
    respond_ok,
    server_error,
)
from archartifacts.services.notifying.provider import NotifierProvider


MISSING_TOPIC_MESSAGE = "Bad Request: Missing topic"
MISSING_CALLBACK_MESSAGE = "Bad Request: Missing topic or callback URL"
MISSING_NOTIFY_MESSAGE = "Bad Request: Missing recipient or message"
SUBSCRIPTION_NOT_FOUND_MESSAGE = "Not Found: Subscription not found."


def build_notifier_router(
    current_notifier: Callable[[], NotifierProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["notifying"])

    @router.post("/api/notifying/topic")
    async def create_topic(request: Request) -> Response:
        notifier = current_notifier()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        topic = body.get("topic")
        if is_blank(topic):
            return bad_request(MISSING_TOPIC_MESSAGE)
        return await respond_ok(notifier.create_topic(str(topic)))

    @router.post("/api/notifying/subscribe/topic/{topic}")
    async def subscribe(topic: str, request: Request) -> Response:
        notifier = current_notifier()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        callback_url = body.get("callbackUrl")
        if is_blank(callback_url):
            return bad_request(MISSING_CALLBACK_MESSAGE)
        return await respond_ok(
            notifier.subscribe(topic, notifier.webhook(topic, str(callback_url)))
        )

    @router.post("/api/notifying/unsubscribe/topic/{topic}")
    async def unsubscribe(topic: str, request: Request) -> Response:
        notifier = current_notifier()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        callback_url = body.get("callbackUrl")
        if is_blank(callback_url):
            return bad_request(MISSING_CALLBACK_MESSAGE)
        try:
            removed = notifier.unsubscribe(topic, notifier.webhook(topic, str(callback_url)))
        except Exception as exc:
            return server_error(exc)
        if not removed:
            return PlainTextResponse(SUBSCRIPTION_NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse("OK")

    @router.post("/api/notifying/notify/topic/{topic}")
    async def notify(topic: str, request: Request) -> Response:
        notifier = current_notifier()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        message = body.get("message")
        if is_missing(message):
            return bad_request(MISSING_NOTIFY_MESSAGE)

        async def _notify() -> dict[str, int]:
            return {"delivered": await notifier.notify(topic, message)}

        return await respond_json(_notify())

    add_status_route(router, Capability.NOTIFYING.value, emitter)
    return router


def register_notifier_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    notifier: NotifierProvider,
) -> Optional[APIRouter]:
    """Mount the notifying routes on ``options["app"]`` if one was given."""
    router = build_notifier_router(provider_source(options, notifier), emitter)
    return router if mount_router(options, router, Capability.NOTIFYING.value) else None
