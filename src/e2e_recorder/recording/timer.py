"""Per-scenario wall-clock timing."""

from __future__ import annotations

import time
from collections.abc import Callable


class TimerHandle:
    """Elapsed-time handle bound to one scenario name.

    end() may be called any number of times; each call returns the
    milliseconds elapsed since start, not since the previous call.
    """

    def __init__(self, name: str, clock: Callable[[], float] = time.monotonic) -> None:
        self.name = name
        self._clock = clock
        self.started_at = clock()

    def end(self) -> int:
        elapsed = self._clock() - self.started_at
        return max(0, int(round(elapsed * 1000)))

    def __repr__(self) -> str:
        return f"TimerHandle(name={self.name!r})"


def start_timer(name: str, clock: Callable[[], float] = time.monotonic) -> TimerHandle:
    """Capture the current instant and return a handle bound to name."""
    return TimerHandle(name, clock=clock)
