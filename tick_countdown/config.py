"""Countdown timer configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from tick_countdown.log import LEVELS
from tick_countdown.types import TICKS_PER_SECOND


@dataclass(frozen=True)
class TimerConfig:
    """Immutable configuration for a :class:`~tick_countdown.CountdownTimer`.

    Attributes:
        tps: Tick rate of the loop built when no loop is passed in. Must be a
            positive multiple of ``TICKS_PER_SECOND``.
        log_level: Level stamped on entries of the default log sink.
        warn_unhandled_errors: Emit a logging warning when an ``error``
            event is delivered with no subscribers.
    """

    tps: int = TICKS_PER_SECOND
    log_level: str = "INFO"
    warn_unhandled_errors: bool = True

    def __post_init__(self) -> None:
        if self.tps <= 0 or self.tps % TICKS_PER_SECOND:
            raise ValueError(
                f"tps must be a positive multiple of {TICKS_PER_SECOND}, got {self.tps}"
            )
        if self.log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")
