from __future__ import annotations

import functools
import threading
from typing import Callable, Optional, Protocol

from loguru import logger

Unsubscribe = Callable[[], None]


class ActivitySource(Protocol):
    """Anything that can report user activity (UI events, requests, ...)."""

    def subscribe(self, callback: Callable[[], None]) -> Unsubscribe:
        raise NotImplementedError


class InactivityTimer:
    """Countdown armed on construction, re-armed by activity, firing ``on_expire`` once.

    ``timer_factory`` must build an object with ``start()``/``cancel()`` from
    ``(interval_seconds, function)``, like ``threading.Timer``.
    """

    def __init__(
        self,
        timeout_seconds: float,
        on_expire: Callable[[], None],
        *,
        activity_source: Optional[ActivitySource] = None,
        timer_factory: Callable[[float, Callable[[], None]], object] = threading.Timer,
    ):
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._timeout = float(timeout_seconds)
        self._on_expire = on_expire
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer = None
        self._generation = 0
        self._cancelled = False
        self._expired = False
        self._unsubscribe: Optional[Unsubscribe] = None

        with self._lock:
            self._arm()
        if activity_source is not None:
            self._unsubscribe = activity_source.subscribe(self.touch)

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._expired)

    def _arm(self) -> None:
        self._generation += 1
        timer = self._timer_factory(self._timeout, functools.partial(self._fire, self._generation))
        if hasattr(timer, "daemon"):
            timer.daemon = True
        self._timer = timer
        timer.start()

    def touch(self) -> None:
        """Activity signal: restart the countdown."""
        with self._lock:
            if not self.active:
                return
            if self._timer is not None:
                self._timer.cancel()
            self._arm()

    def cancel(self) -> None:
        """Tear down: stop the countdown and detach from the activity source."""
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a countdown replaced by touch() may still run if cancel() lost the race
            if generation != self._generation or not self.active:
                return
            self._expired = True
            self._timer = None
        logger.info("Session expired due to inactivity")
        self._on_expire()


def session_expired(last_seen: Optional[float], now: float, timeout_seconds: float) -> bool:
    """Request-scoped form of the same rule, for sessions without a live timer."""
    if last_seen is None:
        return False
    return (now - float(last_seen)) >= timeout_seconds
