"""Loop - single-threaded cooperative scheduler with periodic handles."""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Clock:
    """Counts loop ticks at a fixed rate; `elapsed` is loop time in seconds."""

    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._tick_number * self._dt

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number


@dataclass(eq=False)
class Handle:
    """Recurring callback. Fires every `interval` loop ticks until cancelled."""

    name: str
    interval: int
    callback: Callable[[], None]
    elapsed: int = 0
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class Loop:
    """Drives periodic handles at a fixed rate and runs deferred callbacks.

    Deferred callbacks queued with :meth:`call_soon` never run inside the
    call that queued them. They run, in FIFO order, when the loop drains:
    before and after every tick, or on an explicit :meth:`drain`.
    """

    def __init__(self, tps: int = 10) -> None:
        self._clock = Clock(tps)
        self._handles: list[Handle] = []
        self._deferred: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()
        self._start_hooks: list[Callable[[Loop], None]] = []
        self._stop_hooks: list[Callable[[Loop], None]] = []
        self._stop_requested: bool = False

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def tps(self) -> int:
        return self._clock.tps

    @property
    def pending(self) -> int:
        """Number of deferred callbacks waiting for the next drain."""
        return len(self._deferred)

    def handles(self) -> list[Handle]:
        """Live (not cancelled) periodic handles, in creation order."""
        return [h for h in self._handles if not h.cancelled]

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._deferred.append((callback, args))

    def call_every(
        self, interval: int, callback: Callable[[], None], name: str = "",
    ) -> Handle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = Handle(name=name or getattr(callback, "__name__", "handle"),
                        interval=interval, callback=callback)
        self._handles.append(handle)
        logger.debug("handle %r scheduled every %d ticks", handle.name, interval)
        return handle

    def on_start(self, hook: Callable[[Loop], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[Loop], None]) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def drain(self) -> int:
        """Run deferred callbacks until the queue is empty. Returns the count run."""
        count = 0
        while self._deferred:
            callback, args = self._deferred.popleft()
            callback(*args)
            count += 1
        return count

    def _tick(self) -> None:
        self._clock.advance()
        for handle in list(self._handles):
            # An earlier callback in this tick may have cancelled it.
            if handle.cancelled:
                continue
            handle.elapsed += 1
            if handle.elapsed >= handle.interval:
                handle.elapsed = 0
                handle.callback()
        self._handles = [h for h in self._handles if not h.cancelled]

    def step(self) -> None:
        self._stop_requested = False
        self.drain()
        self._tick()
        self.drain()

    def run(self, n: int) -> None:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        for _ in range(n):
            self.drain()
            self._tick()
            self.drain()
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self)

    def run_forever(self) -> None:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        dt = self._clock.dt
        while not self._stop_requested:
            start = time.monotonic()
            self.drain()
            self._tick()
            self.drain()
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        for hook in self._stop_hooks:
            hook(self)
