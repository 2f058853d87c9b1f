"""In-process pub/sub event bus with deferred, ordered delivery."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from tick_countdown.loop import Loop

logger = logging.getLogger(__name__)

Handler = Callable[[str, dict[str, Any]], None]


class EventBus:
    """Publishes events through a :class:`Loop` so that handlers run after
    the publishing call has returned.

    ``on_unhandled`` is called as ``on_unhandled(event_name, data)`` when an
    event is delivered and nobody is subscribed to it.
    """

    def __init__(
        self,
        loop: Loop,
        on_unhandled: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        self._loop = loop
        self._subscribers: dict[str, list[Handler]] = {}
        self._on_unhandled = on_unhandled

    def subscribe(self, event_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: Handler) -> None:
        """Remove the first registration of ``handler``, including one made
        with :meth:`once`."""
        handlers = self._subscribers.get(event_name)
        if handlers is None:
            return
        for i, h in enumerate(handlers):
            if h is handler or getattr(h, "listener", None) is handler:
                del handlers[i]
                return

    def once(self, event_name: str, handler: Handler) -> None:
        """Subscribe ``handler`` for a single delivery of ``event_name``."""

        def _once(name: str, data: dict[str, Any]) -> None:
            self.unsubscribe(event_name, _once)
            handler(name, data)

        _once.listener = handler  # type: ignore[attr-defined]
        self.subscribe(event_name, _once)

    def listener_count(self, event_name: str) -> int:
        return len(self._subscribers.get(event_name, []))

    def publish(self, event_name: str, **data: Any) -> None:
        self._loop.call_soon(self._dispatch, event_name, data)

    def _dispatch(self, event_name: str, data: dict[str, Any]) -> None:
        if not self.listener_count(event_name):
            logger.debug("no subscribers for %r", event_name)
            if self._on_unhandled is not None:
                self._on_unhandled(event_name, data)
            return
        for handler in list(self._subscribers[event_name]):
            handler(event_name, data)
