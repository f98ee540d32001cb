"""Notifying capability: topic pub/sub with in-process and webhook subscribers."""

from archartifacts.services.notifying.factory import create_notifier
from archartifacts.services.notifying.provider import NotifierProvider, WebhookSubscriber
from archartifacts.services.notifying.routes import build_notifier_router, register_notifier_routes
from archartifacts.services.notifying.singleton import NotifierService

__all__ = [
    "NotifierProvider",
    "NotifierService",
    "WebhookSubscriber",
    "build_notifier_router",
    "create_notifier",
    "register_notifier_routes",
]
