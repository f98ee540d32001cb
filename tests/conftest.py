"""
Shared Test Fixtures for Architecture Artifacts
=================================================

This module provides reusable pytest fixtures used across the entire
test suite. Fixtures are organized by layer:

    1. Event fixtures (EventEmitter, event recorder)
    2. Backing-store doubles (Redis, Memcached)
    3. Configuration fixtures
    4. Application fixtures (FastAPI app, TestClient)

No fixture touches the network: Redis and Memcached providers are driven
through the in-memory doubles defined here.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from archartifacts.core.config import ArtifactsConfig, ServiceConfig
from archartifacts.core.events import EventEmitter
from archartifacts.server.app import create_app


# =============================================================================
# Events
# =============================================================================

class EventRecorder:
    """Captures every event emitted on an EventEmitter, in order."""

    def __init__(self, emitter: EventEmitter) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        emitter.on_any(self._record)

    def _record(self, name: str, payload: dict[str, Any]) -> None:
        self.events.append((name, payload))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def emitter() -> EventEmitter:
    """Fresh EventEmitter with the default history size."""
    return EventEmitter()


@pytest.fixture
def recorder(emitter: EventEmitter) -> EventRecorder:
    """EventRecorder attached to the ``emitter`` fixture."""
    return EventRecorder(emitter)


# =============================================================================
# Backing-Store Doubles
# =============================================================================

class FakeRedis:
    """In-memory stand-in for the subset of ``redis.asyncio.Redis`` we use.

    Values are stored as given (strings), matching ``decode_responses=True``.
    """

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.lists: dict[str, list[str]] = {}
        self.set_calls: list[tuple[str, str, Optional[int]]] = []
        self.closed = False

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        self.data[key] = value
        self.set_calls.append((key, value, ex))
        return True

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            if self.lists.pop(key, None) is not None:
                removed += 1
        return removed

    async def rpush(self, key: str, *values: str) -> int:
        items = self.lists.setdefault(key, [])
        items.extend(values)
        return len(items)

    async def lpop(self, key: str) -> Optional[str]:
        items = self.lists.get(key)
        if not items:
            return None
        value = items.pop(0)
        if not items:
            del self.lists[key]
        return value

    async def llen(self, key: str) -> int:
        return len(self.lists.get(key, []))

    async def lindex(self, key: str, index: int) -> Optional[str]:
        items = self.lists.get(key, [])
        try:
            return items[index]
        except IndexError:
            return None

    async def scan_iter(self, match: str = "*"):
        for key in list(self.lists) + list(self.data):
            if fnmatch.fnmatch(key, match):
                yield key

    async def aclose(self) -> None:
        self.closed = True


class FailingRedis(FakeRedis):
    """FakeRedis whose every read and write raises ConnectionError."""

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        raise ConnectionError("Connection refused")

    async def get(self, key: str) -> Optional[str]:
        raise ConnectionError("Connection refused")


class FakeMemcached:
    """In-memory stand-in for ``aiomcache.Client`` (bytes keys and values)."""

    def __init__(self) -> None:
        self.data: dict[bytes, bytes] = {}
        self.set_calls: list[tuple[bytes, bytes, int]] = []
        self.closed = False

    async def set(self, key: bytes, value: bytes, exptime: int = 0) -> bool:
        self.data[key] = value
        self.set_calls.append((key, value, exptime))
        return True

    async def get(self, key: bytes) -> Optional[bytes]:
        return self.data.get(key)

    async def delete(self, key: bytes) -> bool:
        return self.data.pop(key, None) is not None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Fresh FakeRedis client."""
    return FakeRedis()


@pytest.fixture
def failing_redis() -> FailingRedis:
    """FakeRedis that refuses every read and write."""
    return FailingRedis()


@pytest.fixture
def fake_memcached() -> FakeMemcached:
    """Fresh FakeMemcached client."""
    return FakeMemcached()


# =============================================================================
# Configuration
# =============================================================================

def filing_config(root: Path) -> ServiceConfig:
    return ServiceConfig(type="local", options={"base_dir": str(root / "filing")})


@pytest.fixture
def config(tmp_path: Path) -> ArtifactsConfig:
    """Default configuration with quiet logging and a temporary filing root."""
    return ArtifactsConfig(log_level="WARNING", filing=filing_config(tmp_path))


# =============================================================================
# Application
# =============================================================================

@pytest.fixture
def app(config: ArtifactsConfig, emitter: EventEmitter) -> FastAPI:
    """Application with every capability on its default provider.

    The app shares the ``emitter`` fixture, so ``recorder`` sees route events.
    """
    return create_app(config, emitter=emitter)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient running the app's lifespan (shutdown closes providers)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_app(emitter: EventEmitter, tmp_path: Path):
    """Build an app with specific per-capability ServiceConfigs.

    Usage:
        app = make_app(caching=ServiceConfig(type="redis", options={"client": fake}))
    """

    def _make(**services: ServiceConfig) -> FastAPI:
        services.setdefault("filing", filing_config(tmp_path))
        return create_app(ArtifactsConfig(log_level="WARNING", **services), emitter=emitter)

    return _make
