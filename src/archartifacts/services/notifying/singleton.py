"""Process-shared notifier service."""

from __future__ import annotations

from typing import Any

from archartifacts.services.notifying.factory import create_notifier
from archartifacts.services.notifying.provider import NotifierProvider, Subscriber
from archartifacts.services.singleton import ServiceSingleton


class NotifierService(ServiceSingleton[NotifierProvider]):
    """Singleton wrapper around the notifier."""

    def __init__(self) -> None:
        super().__init__("Notifying", create_notifier)

    async def create_topic(self, topic: str) -> None:
        await self.get_instance().create_topic(topic)

    async def subscribe(self, topic: str, callback: Subscriber) -> None:
        await self.get_instance().subscribe(topic, callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> bool:
        return self.get_instance().unsubscribe(topic, callback)

    async def notify(self, topic: str, message: Any) -> int:
        return await self.get_instance().notify(topic, message)
