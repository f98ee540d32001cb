"""Construction of backing-store clients shared by several providers."""

from __future__ import annotations

from typing import Any

from redis import asyncio as aioredis

from archartifacts.core.exceptions import ConfigurationError


def build_redis_client(options: dict[str, Any], owner: str) -> tuple[Any, bool]:
    """Return ``(client, owns_client)`` from provider options.

    An injected ``options["client"]`` wins and is not owned by the provider.
    Otherwise a ``redis.asyncio`` client is created from ``options["url"]``.

    Raises:
        ConfigurationError: If neither ``client`` nor ``url`` is supplied.
    """
    client = options.get("client")
    if client is not None:
        return client, False

    url = options.get("url")
    if not url:
        raise ConfigurationError(
            message=f"{owner} requires a 'url' or 'client' option",
            details={"provider": owner},
        )
    return aioredis.from_url(url, decode_responses=True), True
