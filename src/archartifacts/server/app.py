"""
archartifacts.server.app - Application Factory
================================================

``create_app()`` is the composition root. It wires, in order:

    1. Logging            configure_logging(level, format) from config
    2. EventEmitter       shared by every provider and status route
    3. ServiceRegistry    one provider per enabled capability, each
                          factory mounting its /api/<capability>/... routes
    4. Server routes      /, /api/services/status, /api/events/recent
    5. Lifespan           registry.shutdown() when the server stops

Usage:
    >>> app = create_app(ArtifactsConfig(caching=ServiceConfig(type="memory")))
    >>> app.state.registry.caching.is_initialized
    True

    $ uvicorn --factory archartifacts.server.app:create_app
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

import structlog
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder

from archartifacts import __version__
from archartifacts.core.config import ArtifactsConfig, load_config
from archartifacts.core.events import EventEmitter
from archartifacts.core.logging import configure_logging
from archartifacts.registry import ServiceRegistry


logger = structlog.get_logger()

DEFAULT_RECENT_EVENTS_LIMIT = 50


def create_app(
    config: Optional[ArtifactsConfig] = None,
    emitter: Optional[EventEmitter] = None,
) -> FastAPI:
    """Build the FastAPI application with every enabled capability mounted.

    Args:
        config: Server configuration. None loads ``artifacts.yaml`` (if
            present) plus ``ARTIFACTS_*`` environment variables.
        emitter: Event emitter to share. None creates one sized by
            ``config.event_history_size``.

    Returns:
        The app. ``app.state`` carries ``config``, ``emitter`` and
        ``registry``.

    Raises:
        ConfigurationError: If a configured provider is missing a required
            option (for example ``caching.type=redis`` without a URL).
    """
    config = config if config is not None else load_config()
    configure_logging(config.log_level, config.resolved_log_format)

    emitter = emitter if emitter is not None else EventEmitter(config.event_history_size)
    registry = ServiceRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("server_started", environment=config.environment)
        try:
            yield
        finally:
            await registry.shutdown()
            logger.info("server_stopped")

    app = FastAPI(
        title="Architecture Artifacts Services",
        description="Pluggable cache, queue, logging, scheduling, search, "
        "dataserve, workflow, notification and measuring services.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.emitter = emitter
    app.state.registry = registry

    emitter.on_any(_log_event)
    registry.initialize_all(config, app=app, emitter=emitter)

    # -------------------------------------------------------------------------
    # Server-level routes
    # -------------------------------------------------------------------------
    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "name": "Architecture Artifacts Services",
            "version": __version__,
            "services": registry.names(),
        }

    @app.get("/api/services/status")
    async def services_status() -> dict[str, Any]:
        return registry.status()

    @app.get("/api/events/recent")
    async def recent_events(
        limit: int = Query(default=DEFAULT_RECENT_EVENTS_LIMIT, ge=0),
    ) -> Any:
        return jsonable_encoder(emitter.recent_events(limit))

    logger.info(
        "app_created",
        environment=config.environment,
        services=[name for name, s in registry.status().items() if s["initialized"]],
    )
    return app


def _log_event(name: str, payload: dict[str, Any]) -> None:
    logger.debug("event_emitted", event_name=name, payload_keys=sorted(payload))
