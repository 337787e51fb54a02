from __future__ import annotations

import pytest

from overtime_register.auth.inactivity import InactivityTimer, session_expired


class FakeTimer:
    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.function()


class TimerLog:
    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function):
        t = FakeTimer(interval, function)
        self.timers.append(t)
        return t

    @property
    def current(self) -> FakeTimer:
        return self.timers[-1]


class FakeActivity:
    def __init__(self):
        self.callbacks = []

    def subscribe(self, callback):
        self.callbacks.append(callback)
        return lambda: self.callbacks.remove(callback)

    def emit(self):
        for cb in list(self.callbacks):
            cb()


def test_armed_on_construction():
    log = TimerLog()
    InactivityTimer(900, lambda: None, timer_factory=log)
    assert log.current.started
    assert log.current.interval == 900


def test_expiry_calls_sign_out_once():
    log = TimerLog()
    calls = []
    timer = InactivityTimer(900, lambda: calls.append("out"), timer_factory=log)

    log.current.fire()
    log.current.fire()

    assert calls == ["out"]
    assert timer.expired
    assert not timer.active


def test_activity_resets_countdown():
    log = TimerLog()
    activity = FakeActivity()
    calls = []
    InactivityTimer(900, lambda: calls.append("out"), activity_source=activity, timer_factory=log)
    first = log.current

    activity.emit()

    assert first.cancelled
    assert len(log.timers) == 2
    first.fire()
    assert calls == []


def test_cancel_tears_down():
    log = TimerLog()
    activity = FakeActivity()
    calls = []
    timer = InactivityTimer(900, lambda: calls.append("out"), activity_source=activity, timer_factory=log)

    timer.cancel()
    log.current.fire()
    activity.emit()

    assert calls == []
    assert activity.callbacks == []
    assert len(log.timers) == 1


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        InactivityTimer(0, lambda: None, timer_factory=TimerLog())


def test_session_expired():
    assert not session_expired(None, 1000.0, 900)
    assert not session_expired(200.0, 1000.0, 900)
    assert session_expired(100.0, 1000.0, 900)


def test_replaced_countdown_cannot_sign_out():
    log = TimerLog()
    calls = []
    timer = InactivityTimer(900, lambda: calls.append("out"), timer_factory=log)
    first = log.current

    timer.touch()
    # already running when cancel() arrived
    first.function()

    assert calls == []
    assert timer.active
    log.current.fire()
    assert calls == ["out"]
