"""Tests for LogEntry and MemoryLog."""
import dataclasses
from datetime import datetime, timezone

import pytest
from tick_countdown.log import LogEntry, MemoryLog


def test_log_appends_in_order():
    sink = MemoryLog()
    sink.log("CREATION")
    sink.log("START")
    sink.log("STOP")

    assert [e.message for e in sink.get_log()] == ["CREATION", "START", "STOP"]
    assert len(sink) == 3


def test_entries_are_stamped():
    before = datetime.now(timezone.utc)
    sink = MemoryLog(level="debug")
    sink.log("START")
    after = datetime.now(timezone.utc)

    entry = sink.get_log()[0]
    assert entry.level == "DEBUG"
    assert entry.timestamp.tzinfo is timezone.utc
    assert before <= entry.timestamp <= after


def test_entries_are_immutable():
    entry = LogEntry(message="START", level="INFO", timestamp=datetime.now(timezone.utc))
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.message = "STOP"


def test_get_log_returns_a_copy():
    sink = MemoryLog()
    sink.log("START")

    entries = sink.get_log()
    entries.clear()

    assert len(sink.get_log()) == 1


def test_clear_log():
    sink = MemoryLog()
    sink.log("START")
    sink.log("STOP")
    sink.clear_log()

    assert sink.get_log() == []
    sink.log("START")
    assert [e.message for e in sink.get_log()] == ["START"]


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        MemoryLog(level="verbose")
