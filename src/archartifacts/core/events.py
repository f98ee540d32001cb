"""
archartifacts.core.events - Process-Wide Event Emitter
========================================================

Every provider operation announces itself on a shared EventEmitter after it
completes. The emitter is a pure observation channel: nothing in the
service layer uses it for control flow.

    ┌──────────────┐  emit("cache:put", {...})  ┌──────────────┐
    │  MemoryCache │ ─────────────────────────→ │ EventEmitter │ ──→ listeners
    └──────────────┘                             └──────────────┘
    ┌──────────────┐  emit("queue:enqueue", {...})     │
    │ MemoryQueue  │ ──────────────────────────────────┘ ──→ on_any taps
    └──────────────┘                                      ──→ recent history

Event Naming Convention:
    ``<capability>:<operation>``, for example:
        - ``cache:put``, ``cache:get``, ``cache:delete``
        - ``queue:enqueue``, ``queue:dequeue``
        - ``dataserve:createContainer``, ``workflow:step:end``
    Status routes emit ``api-<capability>-status``.

Delivery Semantics:
    - Listeners are plain (synchronous) callables invoked in registration
      order, inside ``emit()``, on the caller's event loop.
    - A listener that raises is logged and skipped. The remaining listeners
      still run and the emitting provider never sees the exception.
    - Emitting with no listeners is a no-op apart from history recording.

Usage:
    >>> emitter = EventEmitter()
    >>> seen = []
    >>> emitter.on("cache:put", seen.append)
    >>> emitter.emit("cache:put", {"key": "user:1", "value": {"name": "Ann"}})
    1
    >>> seen
    [{'key': 'user:1', 'value': {'name': 'Ann'}}]
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field


logger = structlog.get_logger()


# =============================================================================
# Type Aliases
# =============================================================================
# Listener:     called with the event payload.
# AnyListener:  called with (event_name, payload) for every event.
# =============================================================================
Listener = Callable[[dict[str, Any]], Any]
AnyListener = Callable[[str, dict[str, Any]], Any]


class EmittedEvent(BaseModel):
    """One entry in the emitter's recent-events history."""

    name: str = Field(description="Event name, e.g. 'cache:put'")
    payload: dict[str, Any] = Field(default_factory=dict)
    emitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event was emitted (UTC)",
    )


class EventEmitter:
    """Synchronous publish channel shared by every provider and route.

    Attributes:
        _listeners: Maps event names to listeners in registration order.
        _any_listeners: Taps that receive every event.
        _history: Bounded deque of recently emitted events.
        _emitted_count: Total events emitted since construction.

    Example:
        >>> emitter = EventEmitter(history_size=50)
        >>> emitter.on_any(lambda name, payload: print(name))
        >>> emitter.emit("queue:enqueue", {"queue": "default", "item": "x"})
        queue:enqueue
        0
    """

    def __init__(self, history_size: int = 200) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._any_listeners: list[AnyListener] = []
        self._history: deque[EmittedEvent] = deque(maxlen=history_size)
        self._emitted_count: int = 0
        self._logger = logger.bind(component="event_emitter")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def emitted_count(self) -> int:
        """Total number of ``emit()`` calls since construction."""
        return self._emitted_count

    # =========================================================================
    # Registration
    # =========================================================================

    def on(self, event: str, listener: Listener) -> None:
        """Register ``listener`` for ``event``.

        The same listener may be registered more than once; it is then
        invoked once per registration.
        """
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> bool:
        """Remove one registration of ``listener`` for ``event``.

        Returns:
            True if a registration was removed, False if none matched.
        """
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]
        return True

    def on_any(self, listener: AnyListener) -> None:
        """Register a tap that receives ``(event, payload)`` for every event."""
        self._any_listeners.append(listener)

    def listener_count(self, event: str) -> int:
        """Number of listeners registered for ``event`` (taps excluded)."""
        return len(self._listeners.get(event, []))

    def remove_all_listeners(self) -> None:
        """Drop every listener and tap. History is kept."""
        self._listeners.clear()
        self._any_listeners.clear()

    # =========================================================================
    # Emission
    # =========================================================================

    def emit(self, event: str, payload: Optional[dict[str, Any]] = None) -> int:
        """Deliver ``payload`` to every listener registered for ``event``.

        Listener exceptions are caught, logged and otherwise ignored.

        Args:
            event: Event name.
            payload: Event data. ``None`` is delivered as an empty dict.

        Returns:
            The number of event-specific listeners that were invoked.
        """
        data = payload if payload is not None else {}
        self._emitted_count += 1
        if self._history.maxlen:
            self._history.append(EmittedEvent(name=event, payload=data))

        # Copy so a listener may unregister itself during delivery.
        listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            try:
                listener(data)
            except Exception as exc:
                self._logger.error(
                    "event_listener_error",
                    event_name=event,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(exc),
                )

        for tap in list(self._any_listeners):
            try:
                tap(event, data)
            except Exception as exc:
                self._logger.error(
                    "event_tap_error",
                    event_name=event,
                    error=str(exc),
                )

        return len(listeners)

    # =========================================================================
    # History
    # =========================================================================

    def recent_events(self, limit: Optional[int] = None) -> list[EmittedEvent]:
        """Return recent events, newest first.

        Args:
            limit: Maximum number of events. None returns all retained.
        """
        events = list(reversed(self._history))
        if limit is not None:
            return events[: max(limit, 0)]
        return events
