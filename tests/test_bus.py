"""Unit tests for EventBus."""
from __future__ import annotations

from tick_countdown import EventBus, Loop


def _bus(**kwargs) -> tuple[Loop, EventBus]:
    loop = Loop()
    return loop, EventBus(loop, **kwargs)


def test_publish_is_delivered_after_drain():
    """Publish queues the event; handlers only run when the loop drains."""
    loop, bus = _bus()
    received = []

    bus.subscribe("start", lambda name, data: received.append((name, data)))
    bus.publish("start", value=42)
    assert received == []

    loop.drain()
    assert received == [("start", {"value": 42})]


def test_handler_subscribed_after_publish_still_receives():
    loop, bus = _bus()
    received = []

    bus.publish("start")
    bus.subscribe("start", lambda name, data: received.append(name))
    loop.drain()

    assert received == ["start"]


def test_publish_without_subscribe():
    """No subscribers: delivery is a no-op."""
    loop, bus = _bus()
    bus.publish("nobody_listens", value=1)
    loop.drain()  # Should not raise


def test_multiple_handlers_called_in_registration_order():
    loop, bus = _bus()
    order = []

    bus.subscribe("event", lambda n, d: order.append("a"))
    bus.subscribe("event", lambda n, d: order.append("b"))
    bus.subscribe("event", lambda n, d: order.append("c"))
    bus.publish("event")
    loop.drain()

    assert order == ["a", "b", "c"]


def test_events_delivered_in_publish_order():
    loop, bus = _bus()
    received = []

    def handler(name: str, data: dict) -> None:
        received.append(name)

    for name in ("start", "pause", "resume", "stop"):
        bus.subscribe(name, handler)
    for name in ("start", "pause", "resume", "stop"):
        bus.publish(name)
    loop.drain()

    assert received == ["start", "pause", "resume", "stop"]


def test_unsubscribe():
    loop, bus = _bus()
    received = []

    def handler(name: str, data: dict) -> None:
        received.append(name)

    bus.subscribe("event", handler)
    bus.unsubscribe("event", handler)
    bus.publish("event")
    loop.drain()

    assert received == []
    assert bus.listener_count("event") == 0


def test_unsubscribe_unknown_is_noop():
    _, bus = _bus()

    def handler(name: str, data: dict) -> None:
        pass

    bus.unsubscribe("never_subscribed", handler)
    bus.subscribe("event", handler)
    bus.unsubscribe("event", lambda n, d: None)
    assert bus.listener_count("event") == 1


def test_once_delivers_a_single_time():
    loop, bus = _bus()
    received = []

    bus.once("tick", lambda name, data: received.append(data["remaining"]))
    bus.publish("tick", remaining=2)
    bus.publish("tick", remaining=1)
    loop.drain()

    assert received == [2]
    assert bus.listener_count("tick") == 0


def test_unsubscribe_removes_once_handler():
    loop, bus = _bus()
    received = []

    def handler(name: str, data: dict) -> None:
        received.append(name)

    bus.once("start", handler)
    bus.unsubscribe("start", handler)
    bus.publish("start")
    loop.drain()

    assert received == []
    assert bus.listener_count("start") == 0


def test_unsubscribe_removes_only_first_registration():
    loop, bus = _bus()
    received = []

    def handler(name: str, data: dict) -> None:
        received.append(name)

    bus.subscribe("start", handler)
    bus.once("start", handler)
    bus.unsubscribe("start", handler)
    bus.publish("start")
    bus.publish("start")
    loop.drain()

    assert received == ["start"]


def test_listener_count():
    _, bus = _bus()
    assert bus.listener_count("event") == 0
    bus.subscribe("event", lambda n, d: None)
    bus.subscribe("event", lambda n, d: None)
    assert bus.listener_count("event") == 2


def test_on_unhandled_called_without_subscribers():
    unhandled = []
    loop, bus = _bus(on_unhandled=lambda name, data: unhandled.append((name, data)))

    bus.publish("error", error="oops")
    loop.drain()

    assert unhandled == [("error", {"error": "oops"})]


def test_on_unhandled_not_called_with_subscribers():
    unhandled = []
    loop, bus = _bus(on_unhandled=lambda name, data: unhandled.append(name))

    bus.subscribe("error", lambda n, d: None)
    bus.publish("error", error="oops")
    loop.drain()

    assert unhandled == []


def test_handler_unsubscribing_during_dispatch_does_not_skip_others():
    loop, bus = _bus()
    order = []

    def first(name: str, data: dict) -> None:
        order.append("first")
        bus.unsubscribe("event", first)

    bus.subscribe("event", first)
    bus.subscribe("event", lambda n, d: order.append("second"))
    bus.publish("event")
    loop.drain()

    assert order == ["first", "second"]
