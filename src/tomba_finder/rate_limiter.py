"""Fixed-window request scheduler for the Tomba API quota."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from threading import Lock
from typing import TypeVar

from .errors import ConfigError

T = TypeVar("T")

ClockFn = Callable[[], float]
SleepFn = Callable[[float], None]


@dataclass
class WindowState:
    """Start of the current window and the admissions counted in it."""

    window_start: float
    count: int = 0


class RateLimiter:
    """Admit at most ``max_requests`` operations per ``window`` seconds.

    A caller that arrives once the quota is spent is blocked until the window
    ends; after the wait the window restarts unconditionally at the resume time.
    Admission bookkeeping happens under a lock, the operation itself does not,
    so only one waiting caller resets the window and the rest queue behind it.
    """

    def __init__(
        self,
        max_requests: int,
        window: float,
        *,
        clock: ClockFn = time.monotonic,
        sleep: SleepFn = time.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_requests < 1:
            raise ConfigError("max_requests must be >= 1.")
        if window <= 0:
            raise ConfigError("window must be > 0.")
        self._max_requests = max_requests
        self._window = window
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger("tomba_finder")
        self._state = WindowState(window_start=clock())
        self._lock = Lock()

    @property
    def state(self) -> WindowState:
        with self._lock:
            return replace(self._state)

    def _admit(self) -> None:
        with self._lock:
            state = self._state
            now = self._clock()
            if now - state.window_start >= self._window:
                state.count = 0
                state.window_start = now

            if state.count >= self._max_requests:
                wait_time = self._window - (now - state.window_start)
                self._logger.info(
                    "Rate limit reached. Waiting %d seconds...", math.ceil(wait_time)
                )
                self._sleep(wait_time)
                state.count = 0
                state.window_start = self._clock()

            state.count += 1

    def schedule(self, operation: Callable[[], T]) -> T:
        """Run ``operation`` once quota allows and return its result unchanged."""
        self._admit()
        return operation()
