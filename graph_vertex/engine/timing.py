r"""
Timing for driver runs.

    from graph_vertex.engine.timing import Stopwatch

    with Stopwatch() as watch:
        for iteration in range(niters):
            run_iteration(iteration)
            watch.lap()
    print(watch.elapsed_ms, watch.laps)
"""

import time
from typing import Any

__all__ = ["Stopwatch"]


class Stopwatch:
    """Context manager timing a whole run and each lap (iteration) inside it."""

    def __init__(self) -> None:
        self._start: int = 0
        self._end: int | None = None
        self._lap_start: int = 0
        self._laps: list[int] = []

    def __enter__(self) -> "Stopwatch":
        self._start = self._lap_start = time.perf_counter_ns()
        self._end = None
        self._laps = []
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = time.perf_counter_ns()

    def lap(self) -> int:
        """Close the current lap and return its duration in nanoseconds."""
        now = time.perf_counter_ns()
        duration = now - self._lap_start
        self._laps.append(duration)
        self._lap_start = now
        return duration

    @property
    def laps(self) -> tuple[int, ...]:
        return tuple(self._laps)

    @property
    def elapsed_ns(self) -> int:
        """Time since entering, up to exit if the block has finished."""
        end = self._end if self._end is not None else time.perf_counter_ns()
        return end - self._start

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000
