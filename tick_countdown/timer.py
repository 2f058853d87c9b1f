"""CountdownTimer - play/pause/stop state machine over a Loop."""
from __future__ import annotations

import logging
import math
import numbers
from typing import Any

from tick_countdown.bus import EventBus, Handler
from tick_countdown.config import TimerConfig
from tick_countdown.log import LogEntry, LogSink, MemoryLog
from tick_countdown.loop import Handle, Loop
from tick_countdown.types import (
    EVENTS,
    TICKS_PER_SECOND,
    TIMER_PAUSE_ERROR,
    TIMER_START_ERROR,
    TIMER_STOP_ERROR,
    State,
    TimerError,
)

logger = logging.getLogger(__name__)

# (current state, call) -> (new state, emitted event)
TRANSITIONS: dict[tuple[State, str], tuple[State, str]] = {
    (State.STOPPED, "start"): (State.RUNNING, "start"),
    (State.RUNNING, "pause"): (State.PAUSED, "pause"),
    (State.PAUSED, "pause"): (State.RUNNING, "resume"),
    (State.RUNNING, "stop"): (State.STOPPED, "stop"),
    (State.PAUSED, "stop"): (State.STOPPED, "stop"),
    (State.RUNNING, "finish"): (State.STOPPED, "finish"),
}

REJECTIONS: dict[str, tuple[str, str]] = {
    "start": (TIMER_START_ERROR,
              "Can not start timer again, timer has to be stopped first."),
    "pause": (TIMER_PAUSE_ERROR,
              "Can not pause or resume timer, timer is currently stopped."),
    "stop": (TIMER_STOP_ERROR,
             "Can not stop timer, timer is already stopped."),
}


def seconds_to_ticks(seconds: float) -> int:
    """Convert a duration in seconds to internal decrements (1/10 s each).

    Partial decrements round up so the countdown never ends early. The inner
    ``round`` strips float noise such as ``0.3 * 10 == 3.0000000000000004``.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, numbers.Real):
        raise TypeError(f"seconds must be a number, got {type(seconds).__name__}")
    if not math.isfinite(seconds):
        raise ValueError(f"seconds must be finite, got {seconds!r}")
    ticks = math.ceil(round(seconds * TICKS_PER_SECOND, 9))
    if ticks < 1:
        raise ValueError(
            f"seconds must be at least {1 / TICKS_PER_SECOND}, got {seconds!r}"
        )
    return ticks


class CountdownTimer:
    """Counts down from a duration, one internal decrement per 1/10 second.

    State changes happen synchronously inside :meth:`start`, :meth:`pause`
    and :meth:`stop` and are recorded in the log sink straight away. The
    matching event is delivered by the loop after the call has returned, so
    handlers attached right after a call still see its event.

    Rejected calls change nothing and deliver an ``error`` event carrying a
    :class:`TimerError`.
    """

    def __init__(
        self,
        loop: Loop | None = None,
        sink: LogSink | None = None,
        config: TimerConfig | None = None,
    ) -> None:
        self._config = config if config is not None else TimerConfig()
        if loop is None:
            loop = Loop(tps=self._config.tps)
        elif loop.tps % TICKS_PER_SECOND:
            raise ValueError(
                f"loop tps must be a multiple of {TICKS_PER_SECOND}, got {loop.tps}"
            )
        self._loop = loop
        self._interval = loop.tps // TICKS_PER_SECOND
        self._bus = EventBus(loop, on_unhandled=self._on_unhandled)
        self._sink: LogSink = sink if sink is not None else MemoryLog(self._config.log_level)
        self._handle: Handle | None = None
        self._remaining = 0
        self._state = State.STOPPED
        self._set_state(State.STOPPED, "creation")

    def __repr__(self) -> str:
        return f"CountdownTimer(state={self._state.name}, remaining_ticks={self._remaining})"

    @property
    def loop(self) -> Loop:
        return self._loop

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def state(self) -> State:
        return self._state

    @property
    def remaining_ticks(self) -> int:
        return self._remaining

    @property
    def remaining_seconds(self) -> float:
        return self._remaining / TICKS_PER_SECOND

    # ----- Subscriptions -----

    def on(self, event_name: str, handler: Handler) -> None:
        self._bus.subscribe(_checked(event_name), handler)

    def off(self, event_name: str, handler: Handler) -> None:
        self._bus.unsubscribe(_checked(event_name), handler)

    def once(self, event_name: str, handler: Handler) -> None:
        self._bus.once(_checked(event_name), handler)

    # ----- Controls -----

    def start(self, seconds: float) -> None:
        """Start counting down from ``seconds``.

        The state guard comes first: while running or paused the call is
        rejected with ``TIMER_START_ERROR`` whatever ``seconds`` is. From
        STOPPED a bad duration raises ``TypeError``/``ValueError``.
        """
        target = TRANSITIONS.get((self._state, "start"))
        if target is None:
            self._reject("start")
            return
        self._remaining = seconds_to_ticks(seconds)
        self._schedule()
        self._set_state(*target)

    def pause(self) -> None:
        target = TRANSITIONS.get((self._state, "pause"))
        if target is None:
            self._reject("pause")
            return
        if self._state is State.RUNNING:
            self._cancel()
        else:
            self._schedule()
        self._set_state(*target)

    def stop(self) -> None:
        target = TRANSITIONS.get((self._state, "stop"))
        if target is None:
            self._reject("stop")
            return
        self._cancel()
        self._remaining = 0
        self._set_state(*target)

    def get_current_state(self) -> State:
        return self._state

    def get_log(self) -> list[LogEntry]:
        return self._sink.get_log()

    def clear_log(self) -> None:
        self._sink.clear_log()

    # ----- Internals -----

    def _schedule(self) -> None:
        self._cancel()
        self._handle = self._loop.call_every(self._interval, self._tick, name="countdown")

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self._finish()
        elif self._remaining % TICKS_PER_SECOND == 0:
            self._bus.publish("tick", remaining=self._remaining // TICKS_PER_SECOND)

    def _finish(self) -> None:
        self._cancel()
        self._set_state(*TRANSITIONS[(self._state, "finish")])

    def _set_state(self, state: State, event_name: str) -> None:
        logger.debug("%s -> %s (%s)", self._state.name, state.name, event_name)
        self._state = state
        self._bus.publish(event_name)
        self._sink.log(event_name.upper())

    def _reject(self, call: str) -> None:
        name, message = REJECTIONS[call]
        logger.info("%s rejected while %s", call, self._state.name)
        self._bus.publish("error", error=TimerError(name, message))

    def _on_unhandled(self, event_name: str, data: dict[str, Any]) -> None:
        if event_name == "error" and self._config.warn_unhandled_errors:
            error = data["error"]
            logger.warning("Unhandled timer error %s: %s", error.name, error.message)


def _checked(event_name: str) -> str:
    if event_name not in EVENTS:
        raise ValueError(f"Unknown timer event {event_name!r}, expected one of {EVENTS}")
    return event_name
