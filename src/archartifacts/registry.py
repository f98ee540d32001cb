"""
archartifacts.registry - Service Registry
===========================================

The composition root's handle on every capability. A ServiceRegistry owns
one ServiceSingleton per capability and is stored on
``app.state.registry`` by the application factory, so route handlers and
background code reach providers through it instead of module globals.

    ┌──────────────────────────── ServiceRegistry ───────────────────────────┐
    │  caching    → CacheService      ──→ MemoryCache | RedisCache | ...     │
    │  queueing   → QueueService      ──→ MemoryQueue | RedisQueue           │
    │  logging    → LoggerService     ──→ ConsoleLogger | FileLogger         │
    │  scheduling → SchedulerService  ──→ SchedulerProvider                  │
    │  searching  → SearchService     ──→ SearchProvider                     │
    │  dataserve  → DataServeService  ──→ MemoryDataServe | FileDataServe    │
    │  workflow   → WorkflowService   ──→ WorkflowProvider                   │
    │  notifying  → NotifierService   ──→ NotifierProvider                   │
    │  measuring  → MeasuringService  ──→ MeasuringProvider                  │
    │  filing     → FilingService     ──→ LocalFiling                        │
    └────────────────────────────────────────────────────────────────────────┘

Usage:
    >>> registry = ServiceRegistry()
    >>> registry.initialize_all(config, app=app, emitter=emitter)
    >>> await registry.caching.put("user:1", {"name": "Ann"})
    >>> registry.get("caching").is_initialized
    True
    >>> await registry.shutdown()
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from fastapi import FastAPI

from archartifacts.core.config import ArtifactsConfig
from archartifacts.core.enums import Capability
from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ServiceNotFoundError
from archartifacts.services import (
    CacheService,
    DataServeService,
    FilingService,
    LoggerService,
    MeasuringService,
    NotifierService,
    QueueService,
    SchedulerService,
    SearchService,
    ServiceSingleton,
    WorkflowService,
)


logger = structlog.get_logger()


class ServiceRegistry:
    """One ServiceSingleton per capability, addressable by name.

    Attributes:
        _services: Capability name → service singleton, in startup order.
    """

    def __init__(self) -> None:
        self._services: dict[str, ServiceSingleton[Any]] = {
            Capability.LOGGING.value: LoggerService(),
            Capability.CACHING.value: CacheService(),
            Capability.QUEUEING.value: QueueService(),
            Capability.SEARCHING.value: SearchService(),
            Capability.DATASERVE.value: DataServeService(),
            Capability.MEASURING.value: MeasuringService(),
            Capability.NOTIFYING.value: NotifierService(),
            Capability.WORKFLOW.value: WorkflowService(),
            Capability.SCHEDULING.value: SchedulerService(),
            Capability.FILING.value: FilingService(),
        }
        self._logger = logger.bind(component="service_registry")

    # =========================================================================
    # Typed Accessors
    # =========================================================================

    @property
    def caching(self) -> CacheService:
        return self._services[Capability.CACHING.value]  # type: ignore[return-value]

    @property
    def queueing(self) -> QueueService:
        return self._services[Capability.QUEUEING.value]  # type: ignore[return-value]

    @property
    def logging(self) -> LoggerService:
        return self._services[Capability.LOGGING.value]  # type: ignore[return-value]

    @property
    def scheduling(self) -> SchedulerService:
        return self._services[Capability.SCHEDULING.value]  # type: ignore[return-value]

    @property
    def searching(self) -> SearchService:
        return self._services[Capability.SEARCHING.value]  # type: ignore[return-value]

    @property
    def dataserve(self) -> DataServeService:
        return self._services[Capability.DATASERVE.value]  # type: ignore[return-value]

    @property
    def workflow(self) -> WorkflowService:
        return self._services[Capability.WORKFLOW.value]  # type: ignore[return-value]

    @property
    def notifying(self) -> NotifierService:
        return self._services[Capability.NOTIFYING.value]  # type: ignore[return-value]

    @property
    def measuring(self) -> MeasuringService:
        return self._services[Capability.MEASURING.value]  # type: ignore[return-value]

    @property
    def filing(self) -> FilingService:
        return self._services[Capability.FILING.value]  # type: ignore[return-value]

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, name: str) -> ServiceSingleton[Any]:
        """Return the service singleton for ``name``.

        Raises:
            ServiceNotFoundError: If ``name`` is not a known capability.
        """
        service = self._services.get(name)
        if service is None:
            raise ServiceNotFoundError(name, available=self.names())
        return service

    def has(self, name: str) -> bool:
        return name in self._services

    def names(self) -> list[str]:
        return list(self._services)

    def status(self) -> dict[str, dict[str, Any]]:
        """Per-capability snapshot for ``GET /api/services/status``."""
        return {name: service.status() for name, service in self._services.items()}

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize_all(
        self,
        config: ArtifactsConfig,
        app: Optional[FastAPI] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        """Initialize every enabled capability from ``config``.

        When ``app`` is given it is passed as ``options["app"]`` so each
        factory mounts its routes. Disabled capabilities stay uninitialized.

        Raises:
            ConfigurationError: From a provider whose required options are
                missing. Capabilities initialized before it stay initialized.
        """
        for name, service in self._services.items():
            service_config = config.service(name)
            if not service_config.enabled:
                self._logger.info("service_disabled", service=name)
                continue

            options = dict(service_config.options)
            if app is not None:
                options["app"] = app
            service.initialize(service_config.type, options, emitter)

        self._logger.info(
            "services_initialized",
            initialized=[n for n, s in self._services.items() if s.is_initialized],
        )

    def reset_all(self) -> None:
        """Forget every provider instance without closing it."""
        for service in self._services.values():
            service.reset()

    async def shutdown(self) -> None:
        """Close every provider in reverse startup order, then reset.

        A provider whose ``close()`` fails is logged and the remaining
        providers are still closed.
        """
        for name, service in reversed(list(self._services.items())):
            try:
                await service.shutdown()
            except Exception as exc:
                self._logger.error("service_shutdown_failed", service=name, error=str(exc))
                service.reset()
        self._logger.info("services_shut_down")

    # =========================================================================
    # Async Context Manager
    # =========================================================================

    async def __aenter__(self) -> ServiceRegistry:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.shutdown()

    def __repr__(self) -> str:
        initialized = sum(1 for s in self._services.values() if s.is_initialized)
        return f"ServiceRegistry(services={len(self._services)}, initialized={initialized})"
