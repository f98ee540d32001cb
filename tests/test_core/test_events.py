"""
Tests for archartifacts.core.events
=====================================

The EventEmitter is the observation channel every provider reports to.
These tests verify:
    - Listener registration, ordering and removal
    - Exception isolation (a failing listener never reaches the emitter)
    - Catch-all taps
    - Bounded recent-event history
"""

from archartifacts.core.events import EmittedEvent, EventEmitter


# =============================================================================
# Test: Registration and Delivery
# =============================================================================
class TestEventDelivery:
    """Tests for on/off/emit."""

    def test_emit_calls_listener_with_payload(self) -> None:
        emitter = EventEmitter()
        received = []
        emitter.on("cache:put", received.append)

        count = emitter.emit("cache:put", {"key": "k", "value": 1})

        assert count == 1
        assert received == [{"key": "k", "value": 1}]

    def test_listeners_run_in_registration_order(self) -> None:
        emitter = EventEmitter()
        order = []
        emitter.on("queue:enqueue", lambda payload: order.append("first"))
        emitter.on("queue:enqueue", lambda payload: order.append("second"))

        emitter.emit("queue:enqueue", {})

        assert order == ["first", "second"]

    def test_emit_without_listeners_returns_zero(self) -> None:
        emitter = EventEmitter()
        assert emitter.emit("nobody:listens") == 0

    def test_none_payload_delivered_as_empty_dict(self) -> None:
        emitter = EventEmitter()
        received = []
        emitter.on("cache:instantiated", received.append)

        emitter.emit("cache:instantiated")

        assert received == [{}]

    def test_off_removes_listener(self) -> None:
        emitter = EventEmitter()
        received = []
        emitter.on("cache:get", received.append)

        assert emitter.off("cache:get", received.append) is True
        emitter.emit("cache:get", {"key": "k"})

        assert received == []
        assert emitter.listener_count("cache:get") == 0

    def test_off_unknown_listener_returns_false(self) -> None:
        emitter = EventEmitter()
        assert emitter.off("cache:get", print) is False

    def test_listener_may_unregister_itself(self) -> None:
        """Removing a listener during delivery must not skip the next one."""
        emitter = EventEmitter()
        calls = []

        def once(payload):
            calls.append("once")
            emitter.off("tick", once)

        emitter.on("tick", once)
        emitter.on("tick", lambda payload: calls.append("always"))

        emitter.emit("tick")
        emitter.emit("tick")

        assert calls == ["once", "always", "always"]


# =============================================================================
# Test: Exception Isolation
# =============================================================================
class TestListenerErrors:
    """A raising listener is logged and skipped."""

    def test_failing_listener_does_not_stop_delivery(self) -> None:
        emitter = EventEmitter()
        received = []

        def broken(payload):
            raise RuntimeError("listener bug")

        emitter.on("cache:put", broken)
        emitter.on("cache:put", received.append)

        count = emitter.emit("cache:put", {"key": "k"})

        assert count == 2
        assert received == [{"key": "k"}]

    def test_failing_tap_does_not_propagate(self) -> None:
        emitter = EventEmitter()

        def broken_tap(name, payload):
            raise ValueError("tap bug")

        emitter.on_any(broken_tap)
        emitter.emit("cache:put", {})


# =============================================================================
# Test: Taps and History
# =============================================================================
class TestTapsAndHistory:
    """Tests for on_any and recent_events."""

    def test_on_any_receives_every_event(self) -> None:
        emitter = EventEmitter()
        seen = []
        emitter.on_any(lambda name, payload: seen.append(name))

        emitter.emit("cache:put", {})
        emitter.emit("queue:enqueue", {})

        assert seen == ["cache:put", "queue:enqueue"]

    def test_taps_are_not_counted_as_listeners(self) -> None:
        emitter = EventEmitter()
        emitter.on_any(lambda name, payload: None)
        assert emitter.emit("cache:put", {}) == 0

    def test_recent_events_newest_first(self) -> None:
        emitter = EventEmitter()
        emitter.emit("a", {"n": 1})
        emitter.emit("b", {"n": 2})

        events = emitter.recent_events()

        assert [e.name for e in events] == ["b", "a"]
        assert isinstance(events[0], EmittedEvent)
        assert events[0].payload == {"n": 2}

    def test_history_is_bounded(self) -> None:
        emitter = EventEmitter(history_size=3)
        for i in range(5):
            emitter.emit(f"event:{i}")

        assert [e.name for e in emitter.recent_events()] == ["event:4", "event:3", "event:2"]
        assert emitter.emitted_count == 5

    def test_recent_events_limit(self) -> None:
        emitter = EventEmitter()
        for i in range(5):
            emitter.emit(f"event:{i}")

        assert len(emitter.recent_events(limit=2)) == 2
        assert emitter.recent_events(limit=0) == []

    def test_zero_history_size_disables_history(self) -> None:
        emitter = EventEmitter(history_size=0)
        emitter.emit("cache:put", {})
        assert emitter.recent_events() == []
        assert emitter.emitted_count == 1

    def test_remove_all_listeners_keeps_history(self) -> None:
        emitter = EventEmitter()
        emitter.on("x", lambda payload: None)
        emitter.emit("x")
        emitter.remove_all_listeners()

        assert emitter.listener_count("x") == 0
        assert len(emitter.recent_events()) == 1
