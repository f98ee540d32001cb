"""
archartifacts.services.base - Common Provider Plumbing
========================================================

Every concrete provider (MemoryCache, RedisQueue, FileDataServe, ...)
inherits from ``Provider``. The base class holds the two things all
providers share:

    1. The unvalidated ``options`` dict handed over by the factory.
    2. An optional reference to the shared EventEmitter, plus the
       ``_emit()`` helper that publishes ``<event_prefix>:<operation>``.

A provider built without an emitter simply skips emission; ``_emit()``
never raises on its own.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from archartifacts.core.events import EventEmitter


class Provider:
    """Base class for all capability providers.

    Subclasses set ``event_prefix`` (``"cache"``, ``"queue"`` ...) and call
    ``self._emit("put", key=key, value=value)`` after each successful
    operation.

    Attributes:
        _options: Provider options as received from the factory.
        _emitter: Shared EventEmitter, or None.
    """

    event_prefix: ClassVar[str] = "provider"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        self._options: dict[str, Any] = dict(options or {})
        self._emitter = emitter

    @property
    def options(self) -> dict[str, Any]:
        """The options this provider was constructed with."""
        return self._options

    @property
    def emitter(self) -> Optional[EventEmitter]:
        """The shared EventEmitter, or None when emission is disabled."""
        return self._emitter

    def _emit(self, operation: str, **payload: Any) -> None:
        """Publish ``<event_prefix>:<operation>`` with ``payload``."""
        if self._emitter is not None:
            self._emitter.emit(f"{self.event_prefix}:{operation}", payload)

    async def close(self) -> None:
        """Release client connections or background tasks.

        The default is a no-op; network-backed providers override it.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(event_prefix={self.event_prefix!r})"
