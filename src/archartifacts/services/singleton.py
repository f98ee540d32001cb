"""
archartifacts.services.singleton - One Provider per Capability
================================================================

``ServiceSingleton`` wraps a capability factory and guarantees that at most
one provider instance exists for it until ``reset()`` is called.

Lifecycle:

    ┌───────────────┐ initialize(type, options, emitter) ┌──────────────┐
    │ uninitialized │ ─────────────────────────────────→ │  initialized │
    └───────────────┘                                     └──────┬───────┘
            ↑                                                     │
            └──────────────────────── reset() ────────────────────┘

    - ``initialize()`` on an initialized singleton logs a warning and
      returns the cached instance; the new arguments are ignored.
    - ``get_instance()`` before ``initialize()`` raises
      ServiceNotInitializedError.
    - ``reset()`` is meant for test isolation. Routes mounted by the factory
      look the instance up through the singleton on every request, so after
      reset() they answer 503 until the next initialize(), and then reach
      the new provider.

Per-capability subclasses (CacheService, QueueService, ...) add typed
pass-through methods. Because they call methods declared on the provider
ABC, a misspelt convenience method fails loudly instead of doing nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Optional, TypeVar

import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ServiceNotInitializedError
from archartifacts.services.base import Provider


logger = structlog.get_logger()


ProviderT = TypeVar("ProviderT", bound=Provider)

# A capability factory: (type, options, emitter) -> provider.
ServiceFactory = Callable[
    [Optional[str], dict[str, Any], Optional[EventEmitter]], ProviderT
]


class ServiceSingleton(Generic[ProviderT]):
    """Lazily constructed, process-shared provider for one capability.

    Attributes:
        _service_name: Display name used in logs and errors ("Cache").
        _factory: The capability factory (e.g. ``create_cache``).
        _default_type: Provider type used when ``initialize()`` gets None.
        _instance: The cached provider, or None.
        _type: The provider type the instance was built with.

    Example:
        >>> cache_service = CacheService()
        >>> cache = cache_service.initialize("memory", {}, emitter)
        >>> cache is cache_service.initialize("redis", {"url": "..."})
        True
        >>> cache_service.reset()
    """

    def __init__(
        self,
        service_name: str,
        factory: ServiceFactory[ProviderT],
        default_type: Optional[str] = None,
    ) -> None:
        self._service_name = service_name
        self._factory = factory
        self._default_type = default_type
        self._instance: Optional[ProviderT] = None
        self._type: Optional[str] = None
        self._logger = logger.bind(component="service_singleton", service=service_name)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def is_initialized(self) -> bool:
        return self._instance is not None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(
        self,
        type: Optional[str] = None,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> ProviderT:
        """Build the provider on first call; return the cached one afterwards.

        Args:
            type: Provider variant. None uses the singleton's default type.
            options: Provider options passed to the factory unvalidated,
                plus ``options["service"]`` (this singleton) for route wiring.
            emitter: Shared EventEmitter, or None to disable events.

        Returns:
            The single provider instance for this capability.

        Raises:
            ConfigurationError: Propagated from the provider constructor
                when a required option is missing. The singleton stays
                uninitialized in that case.
        """
        if self._instance is not None:
            self._logger.warning(
                "service_already_initialized",
                requested_type=type,
                current_type=self._type,
            )
            return self._instance

        provider_type = type if type is not None else self._default_type
        factory_options = dict(options or {})
        factory_options["service"] = self
        self._instance = self._factory(provider_type, factory_options, emitter)
        self._type = provider_type
        self._logger.info(
            "service_initialized",
            provider_type=provider_type,
            provider=self._instance.__class__.__name__,
        )
        return self._instance

    def get_instance(self) -> ProviderT:
        """Return the provider.

        Raises:
            ServiceNotInitializedError: If ``initialize()`` has not run.
        """
        if self._instance is None:
            raise ServiceNotInitializedError(self._service_name)
        return self._instance

    def reset(self) -> None:
        """Forget the current instance so the next initialize() builds anew."""
        self._instance = None
        self._type = None
        self._logger.debug("service_reset")

    async def shutdown(self) -> None:
        """Close the provider (if any) and reset the singleton."""
        if self._instance is not None:
            await self._instance.close()
        self.reset()

    def status(self) -> dict[str, Any]:
        """Snapshot used by ``GET /api/services/status``."""
        return {
            "name": self._service_name,
            "initialized": self.is_initialized,
            "type": self._type,
            "provider": (
                self._instance.__class__.__name__ if self._instance is not None else None
            ),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"service_name={self._service_name!r}, "
            f"initialized={self.is_initialized})"
        )
