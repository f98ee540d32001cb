"""
HTTP routes for the workflow capability.

    POST /api/workflow/defineworkflow   body: {"name": str, "steps": [str]} → {"workflowId": name}
    POST /api/workflow/start            body: {"name": str, "data"?: any}   → {"workflowId", "result"}
    GET  /api/workflow/status                                               → "workflow api running"

``steps`` may be omitted or null (no steps); anything other than a list of
strings is a 400. Runs started over HTTP forward every progress report to
the emitter as ``workflow-status``.
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
)
from archartifacts.services.workflow.provider import WorkflowProvider


MISSING_NAME_MESSAGE = "Bad Request: Missing workflow name"
INVALID_STEPS_MESSAGE = "Bad Request: Steps must be a list of step names"


def build_workflow_router(
    current_engine: Callable[[], WorkflowProvider], emitter: Optional[EventEmitter]
) -> APIRouter:
    router = APIRouter(tags=["workflow"])

    def forward_status(report: dict[str, Any]) -> None:
        if emitter is not None:
            emitter.emit("workflow-status", report)

    @router.post("/api/workflow/defineworkflow")
    async def define_workflow(request: Request) -> Response:
        engine = current_engine()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        name = body.get("name")
        if is_blank(name):
            return bad_request(MISSING_NAME_MESSAGE)
        steps = body.get("steps")
        if steps is None:
            steps = []
        if not isinstance(steps, list) or not all(isinstance(step, str) for step in steps):
            return bad_request(INVALID_STEPS_MESSAGE)

        async def _define() -> dict[str, Any]:
            workflow_id = await engine.define_workflow(str(name), steps)
            return {"workflowId": workflow_id}

        return await respond_json(_define())

    @router.post("/api/workflow/start")
    async def start(request: Request) -> Response:
        engine = current_engine()
        try:
            body = await read_json_object(request)
        except RequestValidationError as exc:
            return bad_request(exc.message)
        name = body.get("name")
        if is_blank(name):
            return bad_request(MISSING_NAME_MESSAGE)

        async def _run() -> dict[str, Any]:
            result = await engine.run_workflow(str(name), body.get("data"), forward_status)
            return {"workflowId": name, "result": result}

        return await respond_json(_run())

    add_status_route(router, Capability.WORKFLOW.value, emitter)
    return router


def register_workflow_routes(
    options: dict[str, Any],
    emitter: Optional[EventEmitter],
    engine: WorkflowProvider,
) -> Optional[APIRouter]:
    """Mount the workflow routes on ``options["app"]`` if one was given."""
    router = build_workflow_router(provider_source(options, engine), emitter)
    return router if mount_router(options, router, Capability.WORKFLOW.value) else None
