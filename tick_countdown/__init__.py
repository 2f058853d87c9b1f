"""tick-countdown - A countdown timer with play/pause/stop and lifecycle events."""

from tick_countdown.bus import EventBus
from tick_countdown.config import TimerConfig
from tick_countdown.log import LogEntry, LogSink, MemoryLog
from tick_countdown.loop import Clock, Handle, Loop
from tick_countdown.timer import CountdownTimer
from tick_countdown.types import (
    EVENTS,
    TICKS_PER_SECOND,
    TIMER_PAUSE_ERROR,
    TIMER_START_ERROR,
    TIMER_STOP_ERROR,
    State,
    TimerError,
)

__all__ = [
    "CountdownTimer",
    "State",
    "TimerError",
    "TimerConfig",
    "Loop",
    "Clock",
    "Handle",
    "EventBus",
    "LogEntry",
    "LogSink",
    "MemoryLog",
    "EVENTS",
    "TICKS_PER_SECOND",
    "TIMER_START_ERROR",
    "TIMER_PAUSE_ERROR",
    "TIMER_STOP_ERROR",
]
