"""
Tests for ServiceSingleton and the typed per-capability services.
"""

import pytest

from archartifacts.core.exceptions import ServiceNotInitializedError
from archartifacts.services import (
    CacheService,
    NotifierService,
    QueueService,
    SearchService,
)
from archartifacts.services.caching.memory import MemoryCache
from archartifacts.services.caching.redis import RedisCache


# =============================================================================
# Test: Lifecycle
# =============================================================================
class TestServiceSingleton:
    def test_initialize_uses_default_type(self) -> None:
        service = CacheService()
        assert isinstance(service.initialize(), MemoryCache)
        assert service.status() == {
            "name": "Cache",
            "initialized": True,
            "type": "memory",
            "provider": "MemoryCache",
        }

    def test_second_initialize_returns_same_instance(self, fake_redis) -> None:
        """Later arguments are ignored once an instance exists."""
        service = CacheService()
        first = service.initialize("memory")
        second = service.initialize("redis", {"client": fake_redis})
        assert second is first
        assert service.get_instance() is first

    def test_get_instance_before_initialize_raises(self) -> None:
        service = QueueService()
        with pytest.raises(ServiceNotInitializedError) as exc_info:
            service.get_instance()
        assert exc_info.value.service_name == "Queue"

    def test_reset_allows_rebuild(self, fake_redis) -> None:
        service = CacheService()
        service.initialize("memory")
        service.reset()

        assert service.is_initialized is False
        assert isinstance(service.initialize("redis", {"client": fake_redis}), RedisCache)

    def test_failed_initialize_leaves_service_uninitialized(self) -> None:
        service = CacheService()
        with pytest.raises(Exception):
            service.initialize("redis", {})
        assert service.is_initialized is False

    async def test_shutdown_closes_and_resets(self) -> None:
        service = NotifierService()
        notifier = service.initialize()
        subscriber = notifier.webhook("alerts", "http://hooks.test")

        await service.shutdown()

        assert subscriber._client.is_closed is True
        assert service.is_initialized is False

    def test_status_when_uninitialized(self) -> None:
        assert SearchService().status()["provider"] is None


# =============================================================================
# Test: Typed Pass-throughs
# =============================================================================
class TestPassThroughs:
    async def test_cache_pass_through(self) -> None:
        service = CacheService()
        service.initialize()
        await service.put("k", "v")
        assert await service.get("k") == "v"
        await service.delete("k")
        assert await service.get("k") is None

    async def test_queue_pass_through(self) -> None:
        service = QueueService()
        service.initialize()
        await service.enqueue("x")
        assert await service.size() == 1
        assert await service.dequeue() == "x"

    async def test_pass_through_before_initialize_raises(self) -> None:
        with pytest.raises(ServiceNotInitializedError):
            await CacheService().get("k")
