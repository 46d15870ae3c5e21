import logging

import pytest

from gaugelog.events import EventEmitter
from gaugelog.exceptions import GaugeLogError


def test_listeners_run_in_order() -> None:
    emitter = EventEmitter()
    calls = []
    emitter.on("tick", lambda n: calls.append(("a", n)))
    emitter.on("tick", lambda n: calls.append(("b", n)))

    assert emitter.emit("tick", 1) is True
    assert calls == [("a", 1), ("b", 1)]


def test_emit_without_listeners() -> None:
    assert EventEmitter().emit("nothing") is False


def test_once_and_off() -> None:
    emitter = EventEmitter()
    calls = []
    emitter.once("e", calls.append)
    emitter.emit("e", 1)
    emitter.emit("e", 2)
    assert calls == [1]

    listener = emitter.on("e", calls.append)
    emitter.off("e", listener)
    emitter.emit("e", 3)
    assert calls == [1]
    assert emitter.listener_count("e") == 0


def test_off_removes_pending_once_listener() -> None:
    emitter = EventEmitter()
    calls = []
    emitter.once("e", calls.append)
    emitter.off("e", calls.append)
    emitter.emit("e", 1)
    assert calls == []


def test_remove_all_listeners() -> None:
    emitter = EventEmitter()
    emitter.on("a", print)
    emitter.on("b", print)
    emitter.remove_all_listeners("a")
    assert emitter.listeners("a") == []
    assert emitter.listener_count("b") == 1
    emitter.remove_all_listeners()
    assert emitter.listener_count("b") == 0


def test_unhandled_error_event_raises() -> None:
    emitter = EventEmitter()
    with pytest.raises(ValueError, match="bad"):
        emitter.emit("error", ValueError("bad"))
    with pytest.raises(GaugeLogError):
        emitter.emit("error", "not an exception")


def test_handled_error_event_does_not_raise() -> None:
    emitter = EventEmitter()
    errors = []
    emitter.on("error", errors.append)
    emitter.emit("error", ValueError("bad"))
    assert len(errors) == 1


def test_failing_listener_is_reported_and_skipped(caplog) -> None:
    emitter = EventEmitter()
    calls = []

    def broken(value):
        raise RuntimeError("listener broke")

    emitter.on("e", broken)
    emitter.on("e", calls.append)

    with caplog.at_level(logging.WARNING, logger="gaugelog.events"):
        emitter.emit("e", 1)

    assert calls == [1]
    assert "listener broke" in caplog.text
    assert caplog.records[-1].exc_info is not None
    assert caplog.records[-1].exc_info[0] is RuntimeError
