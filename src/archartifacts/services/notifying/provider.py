"""
archartifacts.services.notifying.provider - Topic Pub/Sub
===========================================================

In-process publish/subscribe. A topic holds an ordered list of callbacks;
``notify`` calls each one with the message in subscription order.

    subscribe("alerts", a)
    subscribe("alerts", b)
    notify("alerts", "hi")        a("hi") then b("hi")   → 2

Delivery Rules:
    - A callback is registered at most once per topic.
    - Callbacks may be sync or async; awaitable results are awaited before
      the next callback runs.
    - A callback that raises is logged, reported as
      ``notification:notify:error``, and skipped. Remaining callbacks still
      run and ``notify`` itself never raises for it.
    - The subscriber list is snapshotted at the start of ``notify``, so a
      callback that (un)subscribes does not affect the current delivery.

Events (only when an emitter was supplied):
    notification:createTopic   {topic}
    notification:subscribe     {topic}
    notification:unsubscribe   {topic}
    notification:notify        {topic, message}         once per delivery
    notification:notify:error  {topic, message, error}
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Optional

import httpx
import structlog

from archartifacts.core.events import EventEmitter
from archartifacts.services.base import Provider


logger = structlog.get_logger()

Subscriber = Callable[[Any], Any]

DEFAULT_WEBHOOK_TIMEOUT_SECONDS = 10.0


class WebhookSubscriber:
    """Subscriber that POSTs ``{"topic", "message"}`` as JSON to a URL.

    Two subscribers are equal when they target the same URL for the same
    topic, so unsubscribing with a freshly built instance works.

    Raises (when called):
        httpx.HTTPError: On transport failure or a non-2xx response.
    """

    def __init__(self, url: str, topic: str, client: httpx.AsyncClient) -> None:
        self.url = url
        self.topic = topic
        self._client = client

    async def __call__(self, message: Any) -> None:
        response = await self._client.post(
            self.url, json={"topic": self.topic, "message": message}
        )
        response.raise_for_status()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebhookSubscriber):
            return NotImplemented
        return (self.url, self.topic) == (other.url, other.topic)

    def __hash__(self) -> int:
        return hash((self.url, self.topic))

    def __repr__(self) -> str:
        return f"WebhookSubscriber(url={self.url!r}, topic={self.topic!r})"


class NotifierProvider(Provider):
    """Topic registry and synchronous fan-out.

    Options:
        http_client: Injected ``httpx.AsyncClient`` for webhook delivery.
            Not closed by ``close()``.
        webhook_timeout: Seconds per webhook request when the client is
            created here (default 10).
    """

    event_prefix = "notification"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._topics: dict[str, list[Subscriber]] = {}
        self._http_client: Optional[httpx.AsyncClient] = self._options.get("http_client")
        self._owns_http_client = False
        self._logger = logger.bind(component="notifier")

    # =========================================================================
    # Topics and subscriptions
    # =========================================================================

    async def create_topic(self, topic: str) -> None:
        """Create ``topic`` if it does not exist yet."""
        if topic in self._topics:
            return
        self._topics[topic] = []
        self._emit("createTopic", topic=topic)

    async def subscribe(self, topic: str, callback: Subscriber) -> None:
        """Add ``callback`` to ``topic``, creating the topic if needed."""
        await self.create_topic(topic)
        subscribers = self._topics[topic]
        if callback not in subscribers:
            subscribers.append(callback)
        self._emit("subscribe", topic=topic)

    def unsubscribe(self, topic: str, callback: Subscriber) -> bool:
        """Remove ``callback`` from ``topic``. False if it was not subscribed."""
        subscribers = self._topics.get(topic)
        if not subscribers or callback not in subscribers:
            return False
        subscribers.remove(callback)
        self._emit("unsubscribe", topic=topic)
        return True

    def list_topics(self) -> list[str]:
        return list(self._topics)

    def subscriber_count(self, topic: str) -> int:
        return len(self._topics.get(topic, []))

    # =========================================================================
    # Delivery
    # =========================================================================

    async def notify(self, topic: str, message: Any) -> int:
        """Deliver ``message`` to every subscriber of ``topic``.

        Returns:
            How many subscribers completed without raising. An unknown
            topic delivers to nobody and returns 0.
        """
        delivered = 0
        for callback in list(self._topics.get(topic, [])):
            try:
                result = callback(message)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                self._logger.warning(
                    "notification_callback_failed",
                    topic=topic,
                    callback=repr(callback),
                    error=str(exc),
                )
                self._emit("notify:error", topic=topic, message=message, error=str(exc))
                continue
            delivered += 1
            self._emit("notify", topic=topic, message=message)
        return delivered

    # =========================================================================
    # Webhooks
    # =========================================================================

    def webhook(self, topic: str, url: str) -> WebhookSubscriber:
        """Build a WebhookSubscriber sharing this provider's HTTP client."""
        return WebhookSubscriber(url, topic, self._get_http_client())

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            timeout = float(self._options.get("webhook_timeout", DEFAULT_WEBHOOK_TIMEOUT_SECONDS))
            self._http_client = httpx.AsyncClient(timeout=timeout)
            self._owns_http_client = True
        return self._http_client

    async def close(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False
