"""A simple accumulating stopwatch."""

from __future__ import annotations

import time


class Timer:
    """Stopwatch that accumulates the time between each start and stop."""

    def __init__(self) -> None:
        self._total_ns = 0
        self._started_ns = 0

    def start(self) -> None:
        """Begin timing an interval."""
        self._started_ns = time.perf_counter_ns()

    def stop(self) -> None:
        """End the current interval and add it to the total."""
        self._total_ns += time.perf_counter_ns() - self._started_ns

    def elapsed(self) -> float:
        """Return the total timed so far, in seconds."""
        return self._total_ns / 1e9

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()