r"""
Iteration driver for vertex-centric programs.

Runs iterations 0..N over a graph. Each iteration calls the program's
lifecycle hooks and updates every active vertex, interval by interval.
Intervals are contiguous id windows processed in parallel; vertices
inside one interval are updated sequentially in ascending id order.

    from graph_vertex.engine import DriverConfig, IterationDriver

    driver = IterationDriver(graph, config=DriverConfig(niters=100, num_intervals=4))
    summary = driver.run(program)
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import psutil

from graph_vertex.engine.context import Context
from graph_vertex.engine.scheduler import TaskScheduler
from graph_vertex.engine.timing import Stopwatch
from graph_vertex.errors import VertexUpdateError
from graph_vertex.graph import Graph, Vertex
from graph_vertex.protocols import VertexProgram
from graph_vertex.types import RunSummary, StopReason

__all__ = ["DriverConfig", "IterationDriver", "default_workers"]

logger = logging.getLogger(__name__)


def default_workers() -> int:
    """Number of physical cores, falling back to logical cores."""
    return psutil.cpu_count(logical=False) or psutil.cpu_count() or 1


@dataclass
class DriverConfig:
    """Configuration for the iteration driver.

    Attributes:
        niters: Maximum number of iterations.
        use_scheduler: Selective scheduling; when off every vertex runs every iteration.
        num_intervals: Number of contiguous id windows per iteration.
        max_workers: Threads processing intervals (None = physical cores).
    """

    niters: int = 1000
    use_scheduler: bool = True
    num_intervals: int = 1
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.niters < 0:
            msg = f"niters must be non-negative, got {self.niters}"
            raise ValueError(msg)
        if self.num_intervals < 1:
            msg = f"num_intervals must be at least 1, got {self.num_intervals}"
            raise ValueError(msg)
        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be at least 1, got {self.max_workers}"
            raise ValueError(msg)


class IterationDriver:
    """Runs a vertex program over a graph until it stops or the budget runs out."""

    def __init__(self, graph: Graph, *, config: DriverConfig | None = None) -> None:
        self._graph = graph
        self._config = config or DriverConfig()
        self._context: Context | None = None

    @property
    def config(self) -> DriverConfig:
        return self._config

    @property
    def context(self) -> Context | None:
        """Context of the most recent run."""
        return self._context

    def intervals(self) -> list[tuple[int, int]]:
        """Split [0, num_vertices) into inclusive (lo, hi) windows."""
        n = self._graph.num_vertices
        if n == 0:
            return []
        count = min(self._config.num_intervals, n)
        size = -(-n // count)
        return [(lo, min(lo + size, n) - 1) for lo in range(0, n, size)]

    def run(self, program: VertexProgram) -> RunSummary:
        """Run the program to completion.

        Args:
            program: Vertex program to execute.

        Returns:
            RunSummary describing how the run ended.

        Raises:
            VertexUpdateError: If any vertex update or interval hook fails.
        """
        program.setup(self._graph)

        scheduler = TaskScheduler(self._graph.num_vertices, enabled=self._config.use_scheduler)
        context = Context(
            scheduler=scheduler,
            num_iterations=self._config.niters,
            num_vertices=self._graph.num_vertices,
        )
        self._context = context

        intervals = self.intervals()
        workers = min(self._config.max_workers or default_workers(), max(len(intervals), 1))

        updates = 0
        executed = 0
        stop_reason = StopReason.ITERATION_CAP

        logger.debug(
            "Running %s on %s: %d intervals, %d workers",
            program.name,
            self._graph,
            len(intervals),
            workers,
        )

        with Stopwatch() as watch, ThreadPoolExecutor(max_workers=workers) as executor:
            for iteration in range(self._config.niters):
                context.iteration = iteration
                scheduler.begin_iteration()

                program.before_iteration(iteration, context)
                updates += self._run_intervals(program, context, intervals, executor)
                program.after_iteration(iteration, context)
                scheduler.end_iteration()
                lap_ns = watch.lap()
                executed = iteration + 1
                scheduled = len(scheduler)

                logger.debug(
                    "Iteration %d done in %.3fms, %d vertices scheduled",
                    iteration,
                    lap_ns / 1_000_000,
                    scheduled,
                )

                if context.finished:
                    stop_reason = StopReason.PROGRAM_FINISHED
                    break
                if scheduler.enabled and scheduled == 0:
                    stop_reason = StopReason.NO_ACTIVE_TASKS
                    break

        logger.info("%s stopped after %d iterations (%s)", program.name, executed, stop_reason.name)

        return RunSummary(
            iterations=executed,
            last_iteration=executed - 1,
            stop_reason=stop_reason,
            elapsed_ns=watch.elapsed_ns,
            updates=updates,
            iteration_ns=watch.laps,
        )

    def _run_intervals(
        self,
        program: VertexProgram,
        context: Context,
        intervals: list[tuple[int, int]],
        executor: ThreadPoolExecutor,
    ) -> int:
        """Process every interval of one iteration, returning the update count."""
        if len(intervals) <= 1:
            return sum(self._run_interval(program, context, lo, hi) for lo, hi in intervals)

        futures = [executor.submit(self._run_interval, program, context, lo, hi) for lo, hi in intervals]
        count = 0
        try:
            for future in as_completed(futures):
                count += future.result()
        except VertexUpdateError:
            for future in futures:
                future.cancel()
            raise
        return count

    def _run_interval(self, program: VertexProgram, context: Context, lo: int, hi: int) -> int:
        """Update the active vertices of [lo, hi] in ascending id order."""
        iteration = context.iteration
        scheduler = context.scheduler

        try:
            program.before_interval(lo, hi, context)
        except Exception as e:
            msg = f"before_interval({lo}, {hi}) failed in iteration {iteration}: {e}"
            raise VertexUpdateError(msg, iteration=iteration) from e

        count = 0
        for vertex_id in range(lo, hi + 1):
            if not scheduler.is_active(vertex_id):
                continue
            try:
                program.update(Vertex(self._graph, vertex_id), context)
            except Exception as e:
                msg = f"Update of vertex {vertex_id} failed in iteration {iteration}: {e}"
                raise VertexUpdateError(msg, vertex_id=vertex_id, iteration=iteration) from e
            count += 1

        try:
            program.after_interval(lo, hi, context)
        except Exception as e:
            msg = f"after_interval({lo}, {hi}) failed in iteration {iteration}: {e}"
            raise VertexUpdateError(msg, iteration=iteration) from e

        return count
