from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from equation_plotter.debouncing import Debouncer


class _FakeThreadTimer:
    created: list["_FakeThreadTimer"] = []

    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self.daemon = False
        self.started = False
        self.cancelled = False
        _FakeThreadTimer.created.append(self)

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True


class _FakeLoopHandle:
    def __init__(self, callback):
        self._callback = callback
        self.cancelled = False

    def fire(self) -> None:
        self._callback()

    def cancel(self) -> None:
        self.cancelled = True


class _FakeAsyncLoop:
    def __init__(self) -> None:
        self.handles: list[_FakeLoopHandle] = []
        self.delays: list[float] = []

    def call_later(self, delay: float, callback):
        handle = _FakeLoopHandle(callback)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle


def test_latest_arguments_win_within_a_burst() -> None:
    calls: list[tuple] = []
    _FakeThreadTimer.created.clear()

    with patch("equation_plotter.debouncing.threading.Timer", _FakeThreadTimer):
        debouncer = Debouncer(lambda *args: calls.append(args), delay_ms=250)
        debouncer(-1.0, 1.0)
        debouncer(-2.0, 2.0)
        debouncer(-3.0, 3.0)

        assert len(_FakeThreadTimer.created) == 1
        timer = _FakeThreadTimer.created[0]
        assert timer.daemon is True
        assert timer.started is True
        assert timer.delay == pytest.approx(0.25)
        assert debouncer.pending

        timer.callback()

    assert calls == [(-3.0, 3.0)]
    assert not debouncer.pending


def test_new_burst_schedules_a_new_timer() -> None:
    calls: list[str] = []
    fake_loop = _FakeAsyncLoop()

    with patch("equation_plotter.debouncing.asyncio.get_running_loop", return_value=fake_loop):
        debouncer = Debouncer(calls.append, delay_ms=100)
        debouncer("a")
        fake_loop.handles[0].fire()
        debouncer("b")
        assert len(fake_loop.handles) == 2
        fake_loop.handles[1].fire()

    assert calls == ["a", "b"]
    assert fake_loop.delays == [pytest.approx(0.1), pytest.approx(0.1)]


def test_cancel_drops_the_pending_call() -> None:
    calls: list[str] = []
    _FakeThreadTimer.created.clear()

    with patch("equation_plotter.debouncing.threading.Timer", _FakeThreadTimer):
        debouncer = Debouncer(calls.append, delay_ms=10)
        debouncer("dropped")
        debouncer.cancel()
        assert _FakeThreadTimer.created[0].cancelled
        _FakeThreadTimer.created[0].callback()

    assert calls == []


def test_flush_runs_immediately_and_is_idempotent() -> None:
    calls: list[str] = []
    _FakeThreadTimer.created.clear()

    with patch("equation_plotter.debouncing.threading.Timer", _FakeThreadTimer):
        debouncer = Debouncer(calls.append, delay_ms=10)
        debouncer("now")
        debouncer.flush()
        debouncer.flush()

    assert calls == ["now"]


def test_non_positive_delay_is_rejected() -> None:
    with pytest.raises(ValueError, match="delay_ms"):
        Debouncer(lambda: None, delay_ms=0)


def test_debouncer_logs_and_keeps_processing_after_callback_error_threading(caplog) -> None:
    state = {"n": 0}

    def _callback(_payload):
        state["n"] += 1
        if state["n"] == 1:
            raise RuntimeError("boom")

    _FakeThreadTimer.created.clear()

    with patch("equation_plotter.debouncing.threading.Timer", _FakeThreadTimer):
        debouncer = Debouncer(_callback, delay_ms=1)
        with caplog.at_level(logging.ERROR, logger="equation_plotter.debouncing"):
            debouncer("first")
            _FakeThreadTimer.created[0].callback()
            debouncer("second")
            assert len(_FakeThreadTimer.created) == 2
            _FakeThreadTimer.created[1].callback()

    assert state["n"] == 2
    assert "Debouncer callback failed" in caplog.text


def test_debouncer_logs_and_keeps_processing_after_callback_error_asyncio(caplog) -> None:
    state = {"n": 0}

    def _callback(_payload):
        state["n"] += 1
        if state["n"] == 1:
            raise RuntimeError("boom")

    fake_loop = _FakeAsyncLoop()

    with patch("equation_plotter.debouncing.asyncio.get_running_loop", return_value=fake_loop):
        debouncer = Debouncer(_callback, delay_ms=1)
        with caplog.at_level(logging.ERROR, logger="equation_plotter.debouncing"):
            debouncer("first")
            fake_loop.handles[0].fire()
            debouncer("second")
            assert len(fake_loop.handles) == 2
            fake_loop.handles[1].fire()

    assert state["n"] == 2
    assert "Debouncer callback failed" in caplog.text
