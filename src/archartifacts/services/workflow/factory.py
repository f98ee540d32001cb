"""Factory for the workflow provider."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.workflow.provider import WorkflowProvider
from archartifacts.services.workflow.routes import register_workflow_routes


logger = structlog.get_logger()


def create_workflow(
    type: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    emitter: Optional[EventEmitter] = None,
) -> WorkflowProvider:
    """Create the workflow engine and wire its HTTP routes.

    ``type`` is accepted for a uniform factory signature and ignored.
    """
    options = dict(options or {})
    if emitter is not None:
        emitter.emit("workflow:instantiated", {"type": type})

    engine = WorkflowProvider(options, emitter)
    logger.info("workflow_created", requested_type=type, steps=len(engine.list_steps()))
    register_workflow_routes(options, emitter, engine)
    return engine
