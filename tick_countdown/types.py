"""Shared states, event names and error types for the countdown timer."""
from __future__ import annotations

from enum import IntEnum

TICKS_PER_SECOND = 10

TIMER_START_ERROR = "TIMER_START_ERROR"
TIMER_PAUSE_ERROR = "TIMER_PAUSE_ERROR"
TIMER_STOP_ERROR = "TIMER_STOP_ERROR"

EVENTS = ("creation", "start", "pause", "resume", "stop", "tick", "finish", "error")


class State(IntEnum):
    STOPPED = 0
    RUNNING = 1
    PAUSED = 2


class TimerError(Exception):
    """A rejected timer call. Delivered with the ``error`` event, never raised."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"TimerError({self.name!r}, {self.message!r})"
