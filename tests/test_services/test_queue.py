"""
Tests for the queueing capability
===================================

MemoryQueue and RedisQueue share one contract, so the FIFO tests run
against both through a parametrized fixture. Route tests use the full app.
"""

import pytest
from fastapi.testclient import TestClient

from archartifacts.core.exceptions import ConfigurationError
from archartifacts.services.queueing import create_queue
from archartifacts.services.queueing.memory import MemoryQueue
from archartifacts.services.queueing.redis import RedisQueue


@pytest.fixture(params=["memory", "redis"])
def queue(request, emitter, fake_redis):
    """Each queue variant, wired to the shared emitter."""
    if request.param == "redis":
        return RedisQueue({"client": fake_redis}, emitter)
    return MemoryQueue({}, emitter)


# =============================================================================
# Test: FIFO Contract
# =============================================================================
class TestQueueContract:
    """Behaviour every queue variant must share."""

    async def test_fifo_order(self, queue) -> None:
        await queue.enqueue("x")
        await queue.enqueue("y")
        assert await queue.dequeue() == "x"
        assert await queue.size() == 1

    async def test_dequeue_empty_returns_none_without_event(self, queue, recorder) -> None:
        assert await queue.dequeue() is None
        assert "queue:dequeue" not in recorder.names()

    async def test_named_queues_are_independent(self, queue) -> None:
        await queue.enqueue("a", "jobs")
        await queue.enqueue("b", "mail")
        assert await queue.size("jobs") == 1
        assert await queue.dequeue("mail") == "b"
        assert await queue.dequeue("jobs") == "a"

    async def test_structured_items(self, queue) -> None:
        await queue.enqueue({"id": 7, "tags": ["x"]})
        assert await queue.dequeue() == {"id": 7, "tags": ["x"]}

    async def test_peek_does_not_remove(self, queue) -> None:
        await queue.enqueue("x")
        assert await queue.peek() == "x"
        assert await queue.size() == 1

    async def test_peek_empty(self, queue) -> None:
        assert await queue.peek() is None

    async def test_clear_returns_removed_count(self, queue, recorder) -> None:
        await queue.enqueue(1)
        await queue.enqueue(2)
        assert await queue.clear() == 2
        assert await queue.size() == 0
        assert recorder.payloads("queue:clear") == [{"queue": "default", "removed": 2}]

    async def test_list_queues(self, queue) -> None:
        await queue.enqueue(1, "jobs")
        await queue.enqueue(2, "mail")
        assert sorted(await queue.list_queues()) == ["jobs", "mail"]

    async def test_reads_do_not_create_queues(self, queue) -> None:
        for i in range(3):
            await queue.size(f"sized-{i}")
            await queue.dequeue(f"drained-{i}")
            await queue.peek(f"peeked-{i}")
            await queue.clear(f"cleared-{i}")
        assert await queue.list_queues() == []

    async def test_drained_queue_is_not_listed(self, queue) -> None:
        await queue.enqueue("x", "jobs")
        await queue.dequeue("jobs")
        assert await queue.list_queues() == []
        assert await queue.size("jobs") == 0

    async def test_events(self, queue, recorder) -> None:
        await queue.enqueue("x", "jobs")
        await queue.dequeue("jobs")
        assert recorder.payloads("queue:enqueue") == [{"queue": "jobs", "item": "x"}]
        assert recorder.payloads("queue:dequeue") == [{"queue": "jobs", "item": "x"}]


# =============================================================================
# Test: Redis Specifics
# =============================================================================
class TestRedisQueue:
    async def test_items_stored_under_prefixed_list(self, fake_redis) -> None:
        queue = RedisQueue({"client": fake_redis})
        await queue.enqueue("x", "jobs")
        assert fake_redis.lists == {"queue:jobs": ['"x"']}

    async def test_custom_prefix(self, fake_redis) -> None:
        queue = RedisQueue({"client": fake_redis, "key_prefix": "wiki-q:"})
        await queue.enqueue(1, "jobs")
        assert "wiki-q:jobs" in fake_redis.lists
        assert await queue.list_queues() == ["jobs"]

    def test_requires_connection_options(self) -> None:
        with pytest.raises(ConfigurationError):
            RedisQueue({})


# =============================================================================
# Test: Factory
# =============================================================================
class TestCreateQueue:
    def test_default_is_memory(self) -> None:
        assert isinstance(create_queue(), MemoryQueue)

    def test_redis(self, fake_redis) -> None:
        assert isinstance(create_queue("redis", {"client": fake_redis}), RedisQueue)

    def test_unknown_falls_back(self) -> None:
        assert isinstance(create_queue("rabbitmq"), MemoryQueue)

    def test_instantiated_event(self, emitter, recorder) -> None:
        create_queue("memory", {}, emitter)
        assert recorder.names() == ["queue:instantiated"]


# =============================================================================
# Test: Routes
# =============================================================================
class TestQueueRoutes:
    def test_enqueue_dequeue_size(self, client: TestClient) -> None:
        assert client.post("/api/queueing/enqueue/jobs", json="x").text == "OK"
        client.post("/api/queueing/enqueue/jobs", json="y")

        assert client.get("/api/queueing/dequeue/jobs").json() == "x"
        assert client.get("/api/queueing/size/jobs").json() == 1

    def test_dequeue_empty_is_null(self, client: TestClient) -> None:
        response = client.get("/api/queueing/dequeue/empty")
        assert response.status_code == 200
        assert response.json() is None

    def test_missing_item_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/api/queueing/enqueue/jobs")
        assert response.status_code == 400
        assert response.text == "Bad Request: Missing queue name or value"

    def test_size_of_unknown_queue_leaves_no_trace(self, app, client: TestClient) -> None:
        assert client.get("/api/queueing/size/nobody").json() == 0
        queue = app.state.registry.queueing.get_instance()
        assert queue._queues == {}

    def test_falsy_items_are_enqueued(self, client: TestClient) -> None:
        for item in ("", 0, False):
            assert client.post("/api/queueing/enqueue/jobs", json=item).status_code == 200
        assert client.get("/api/queueing/size/jobs").json() == 3
        assert client.get("/api/queueing/dequeue/jobs").json() == ""

    def test_status(self, client: TestClient) -> None:
        assert client.get("/api/queueing/status").json() == "queueing api running"
