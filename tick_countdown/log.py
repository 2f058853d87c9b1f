"""Transition log sink."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class LogEntry:
    message: str
    level: str
    timestamp: datetime


class LogSink(Protocol):
    """Anything the timer can record its transitions into."""

    def log(self, message: str) -> None: ...

    def get_log(self) -> list[LogEntry]: ...

    def clear_log(self) -> None: ...


class MemoryLog:
    """Append-only, in-memory list of :class:`LogEntry`.

    Entries are stamped with ``level`` and the current UTC time. They are
    never mutated; :meth:`get_log` hands out a copy of the list.
    """

    def __init__(self, level: str = "INFO") -> None:
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level {level!r}, expected one of {LEVELS}")
        self._level = level
        self._entries: list[LogEntry] = []

    @property
    def level(self) -> str:
        return self._level

    def __len__(self) -> int:
        return len(self._entries)

    def log(self, message: str) -> None:
        entry = LogEntry(message=message, level=self._level,
                         timestamp=datetime.now(timezone.utc))
        self._entries.append(entry)
        logger.debug("[%s] %s", entry.level, entry.message)

    def get_log(self) -> list[LogEntry]:
        return list(self._entries)

    def clear_log(self) -> None:
        self._entries.clear()
