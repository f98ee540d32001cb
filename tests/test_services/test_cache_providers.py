"""
Tests for the cache providers
===============================

Covers the in-memory cache (values and key statistics), the Redis cache
(via FakeRedis) and the Memcached cache (via FakeMemcached), plus the
create_cache factory's variant selection.
"""

import pytest

from archartifacts.core.events import EventEmitter
from archartifacts.core.exceptions import ConfigurationError
from archartifacts.services.caching import create_cache
from archartifacts.services.caching.memcached import MemcachedCache, parse_memcached_url
from archartifacts.services.caching.memory import MemoryCache
from archartifacts.services.caching.redis import RedisCache


# =============================================================================
# Test: In-Memory Cache
# =============================================================================
class TestMemoryCache:
    """Tests for MemoryCache values and events."""

    async def test_put_then_get(self) -> None:
        cache = MemoryCache()
        await cache.put("user:1", {"name": "Ann"})
        assert await cache.get("user:1") == {"name": "Ann"}

    async def test_get_missing_returns_none(self) -> None:
        assert await MemoryCache().get("nope") is None

    async def test_falsy_values_survive(self) -> None:
        """0, "" and False are values, not absence."""
        cache = MemoryCache()
        await cache.put("zero", 0)
        await cache.put("empty", "")
        await cache.put("no", False)
        assert await cache.get("zero") == 0
        assert await cache.get("empty") == ""
        assert await cache.get("no") is False

    async def test_put_replaces(self) -> None:
        cache = MemoryCache()
        await cache.put("k", 1)
        await cache.put("k", 2)
        assert await cache.get("k") == 2
        assert cache.size() == 1

    async def test_delete_absent_key_is_not_an_error(self) -> None:
        cache = MemoryCache()
        await cache.delete("never-set")
        assert await cache.get("never-set") is None

    async def test_events_emitted(self, emitter: EventEmitter, recorder) -> None:
        cache = MemoryCache(emitter=emitter)
        await cache.put("k", "v")
        await cache.get("k")
        await cache.get("missing")
        await cache.delete("k")

        assert recorder.names() == ["cache:put", "cache:get", "cache:get", "cache:delete"]
        assert recorder.payloads("cache:get") == [
            {"key": "k", "value": "v"},
            {"key": "missing", "value": None},
        ]

    async def test_no_emitter_means_no_events(self) -> None:
        cache = MemoryCache()
        await cache.put("k", "v")
        assert cache.emitter is None


# =============================================================================
# Test: Key Statistics
# =============================================================================
class TestMemoryCacheKeyStats:
    """Tests for the bounded per-key statistics."""

    async def test_hits_count_successful_gets_only(self) -> None:
        cache = MemoryCache()
        await cache.put("k", "v")
        await cache.get("k")
        await cache.get("k")
        await cache.get("missing")

        stats = cache.get_key_stats()
        assert len(stats) == 1
        assert stats[0]["cachekey"] == "k"
        assert stats[0]["hits"] == 2

    async def test_stats_newest_first(self) -> None:
        cache = MemoryCache()
        await cache.put("a", 1)
        await cache.put("b", 2)
        await cache.get("a")

        assert [s["cachekey"] for s in cache.get_key_stats()] == ["a", "b"]

    async def test_delete_drops_stats(self) -> None:
        cache = MemoryCache()
        await cache.put("a", 1)
        await cache.delete("a")
        assert cache.get_key_stats() == []

    async def test_least_recently_accessed_is_evicted(self) -> None:
        cache = MemoryCache({"max_key_stats": 2})
        await cache.put("a", 1)
        await cache.put("b", 2)
        await cache.get("a")
        await cache.put("c", 3)

        assert [s["cachekey"] for s in cache.get_key_stats()] == ["c", "a"]
        # Values are never evicted, only their statistics.
        assert await cache.get("b") == 2

    async def test_default_bound_is_one_hundred(self) -> None:
        cache = MemoryCache()
        for i in range(120):
            await cache.put(f"key-{i}", i)

        stats = cache.get_key_stats()
        assert len(stats) == 100
        assert stats[0]["cachekey"] == "key-119"
        assert stats[-1]["cachekey"] == "key-20"

    async def test_stats_are_copies(self) -> None:
        cache = MemoryCache()
        await cache.put("a", 1)
        cache.get_key_stats()[0]["hits"] = 99
        assert cache.get_key_stats()[0]["hits"] == 0


# =============================================================================
# Test: Redis Cache
# =============================================================================
class TestRedisCache:
    """Tests for RedisCache against FakeRedis."""

    async def test_values_round_trip_as_json(self, fake_redis) -> None:
        cache = RedisCache({"client": fake_redis})
        await cache.put("n", 5)
        await cache.put("s", "123")
        await cache.put("d", {"a": [1, 2]})

        assert await cache.get("n") == 5
        assert await cache.get("s") == "123"
        assert await cache.get("d") == {"a": [1, 2]}
        assert fake_redis.data["s"] == '"123"'

    async def test_ttl_passed_as_ex(self, fake_redis) -> None:
        cache = RedisCache({"client": fake_redis})
        await cache.put("k", "v", ttl=30)
        assert fake_redis.set_calls == [("k", '"v"', 30)]

    async def test_key_prefix(self, fake_redis) -> None:
        cache = RedisCache({"client": fake_redis, "key_prefix": "wiki:"})
        await cache.put("k", 1)
        assert "wiki:k" in fake_redis.data
        await cache.delete("k")
        assert fake_redis.data == {}

    async def test_missing_key_returns_none(self, fake_redis) -> None:
        assert await RedisCache({"client": fake_redis}).get("nope") is None

    async def test_injected_client_not_closed(self, fake_redis) -> None:
        cache = RedisCache({"client": fake_redis})
        await cache.close()
        assert fake_redis.closed is False

    def test_missing_connection_options_raise(self) -> None:
        with pytest.raises(ConfigurationError):
            RedisCache({})

    async def test_put_event_includes_ttl(self, fake_redis, emitter, recorder) -> None:
        cache = RedisCache({"client": fake_redis}, emitter)
        await cache.put("k", "v", ttl=10)
        assert recorder.payloads("cache:put") == [{"key": "k", "value": "v", "ttl": 10}]


# =============================================================================
# Test: Memcached Cache
# =============================================================================
class TestMemcachedCache:
    """Tests for MemcachedCache against FakeMemcached."""

    async def test_strings_stored_verbatim(self, fake_memcached) -> None:
        cache = MemcachedCache({"client": fake_memcached})
        await cache.put("s", "hello")
        assert fake_memcached.data[b"s"] == b"hello"
        assert await cache.get("s") == "hello"

    async def test_structured_values_json_encoded(self, fake_memcached) -> None:
        cache = MemcachedCache({"client": fake_memcached})
        await cache.put("d", {"a": 1})
        assert fake_memcached.data[b"d"] == b'{"a":1}'
        assert await cache.get("d") == {"a": 1}

    async def test_json_looking_string_reads_back_decoded(self, fake_memcached) -> None:
        cache = MemcachedCache({"client": fake_memcached})
        await cache.put("s", "123")
        assert await cache.get("s") == 123

    async def test_ttl_passed_as_exptime(self, fake_memcached) -> None:
        cache = MemcachedCache({"client": fake_memcached})
        await cache.put("a", 1, ttl=60)
        await cache.put("b", 2)
        assert [call[2] for call in fake_memcached.set_calls] == [60, 0]

    async def test_delete(self, fake_memcached) -> None:
        cache = MemcachedCache({"client": fake_memcached})
        await cache.put("a", 1)
        await cache.delete("a")
        assert await cache.get("a") is None

    def test_missing_url_raises(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            MemcachedCache({})
        assert exc_info.value.message == "Memcached connection URL is required."

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("cache:11212", ("cache", 11212)),
            ("cache", ("cache", 11211)),
            ("memcached://cache:11213/", ("cache", 11213)),
        ],
    )
    def test_parse_url(self, url: str, expected: tuple) -> None:
        assert parse_memcached_url(url) == expected

    def test_parse_url_bad_port(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_memcached_url("cache:eleven")


# =============================================================================
# Test: Factory
# =============================================================================
class TestCreateCache:
    """create_cache matches the type string exactly."""

    def test_default_is_memory(self) -> None:
        assert isinstance(create_cache(), MemoryCache)

    def test_unknown_type_falls_back_to_memory(self) -> None:
        assert isinstance(create_cache("mongodb"), MemoryCache)

    def test_type_match_is_case_sensitive(self, fake_redis) -> None:
        assert isinstance(create_cache("Redis", {"client": fake_redis}), MemoryCache)

    def test_redis_variant(self, fake_redis) -> None:
        assert isinstance(create_cache("redis", {"client": fake_redis}), RedisCache)

    def test_memcached_variant(self, fake_memcached) -> None:
        assert isinstance(create_cache("memcached", {"client": fake_memcached}), MemcachedCache)

    def test_instantiated_event(self, emitter, recorder) -> None:
        create_cache("memory", {}, emitter)
        assert recorder.events[0] == ("cache:instantiated", {"type": "memory"})

    def test_network_variant_without_options_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            create_cache("redis", {})
