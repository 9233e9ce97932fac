"""Timestamp sources injected into the registry."""

import threading
import time


class SystemClock:
    """Wall-clock seconds since the epoch."""

    def __call__(self) -> int:
        return int(time.time())


class ManualClock:
    """A clock that only moves when told to. Never goes backwards."""

    def __init__(self, start: int = 0):
        self._now = int(start)
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            return self._now

    def advance(self, seconds: int = 1) -> int:
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        with self._lock:
            self._now += int(seconds)
            return self._now

    def set(self, now: int) -> None:
        with self._lock:
            if now < self._now:
                raise ValueError("ManualClock cannot move backwards")
            self._now = int(now)
