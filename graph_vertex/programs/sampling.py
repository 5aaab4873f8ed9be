r"""
Probabilistic shortest-path distances by per-edge existence sampling.

Every edge exists in a sample with probability p and costs a fixed
weight w. Each sampling run realizes a random subgraph lazily while a
Dijkstra-style search expands from the source: an edge is drawn the
moment its tail is finalized. Finalized distances are folded into a
per-vertex aggregate, and the k vertices with the smallest mean
distance are the source's nearest neighbors.

A new run is launched every iteration until max_runs runs have been
started, so several runs are in flight at once. The program ends once
every launched run has drained its queue.

    from graph_vertex.programs.sampling import SamplingEngine

    engine = SamplingEngine(source=0, k=5, max_runs=200, seed=7)
    IterationDriver(graph, config=DriverConfig(max_workers=1)).run(engine)
    for vertex_id, mean in engine.top_k():
        print(vertex_id, mean)
"""

import heapq
import logging
import random
import threading
from dataclasses import dataclass, field, replace
from typing import Any

from graph_vertex.engine.context import Context
from graph_vertex.errors import EdgeDataError
from graph_vertex.graph import Graph, Vertex
from graph_vertex.programs.base import BaseProgram, ProgramRegistry
from graph_vertex.types import SampledEdge, VertexValue

__all__ = ["DistanceAggregate", "SamplingEngine", "SamplingRun"]

logger = logging.getLogger(__name__)


@dataclass
class SamplingRun:
    """State of one randomized single-source search.

    Attributes:
        run_id: Sequence number of the run.
        source: Source vertex id; recorded as visited at distance 0.
        started_at: Iteration in which the run was launched.
        visited: Finalized vertex ids and their distance. Only grows.
        frontier: Vertices finalized last and not yet expanded.
    """

    run_id: int
    source: int
    started_at: int = 0
    visited: dict[int, float] = field(default_factory=dict)
    frontier: dict[int, float] = field(default_factory=dict)
    _queue: list[tuple[float, int]] = field(default_factory=list, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self.visited.setdefault(self.source, 0.0)

    @property
    def done(self) -> bool:
        """True once nothing is left to expand."""
        with self._lock:
            return not self._queue and not self.frontier

    def push(self, vertex_id: int, distance: float) -> bool:
        """Offer a tentative distance; returns False for finalized vertices."""
        with self._lock:
            if vertex_id in self.visited:
                return False
            heapq.heappush(self._queue, (distance, vertex_id))
            return True

    def advance(self) -> dict[int, float]:
        """Finalize every queued vertex sharing the minimum distance.

        Returns:
            The new frontier; empty once the queue has drained.
        """
        with self._lock:
            frontier: dict[int, float] = {}
            while self._queue and self._queue[0][1] in self.visited:
                heapq.heappop(self._queue)
            if self._queue:
                nearest = self._queue[0][0]
                while self._queue and self._queue[0][0] == nearest:
                    distance, vertex_id = heapq.heappop(self._queue)
                    if vertex_id in self.visited:
                        continue
                    self.visited[vertex_id] = distance
                    frontier[vertex_id] = distance
            self.frontier = frontier
            return dict(frontier)

    def take(self, vertex_id: int) -> float | None:
        """Claim a frontier vertex for expansion, returning its final distance."""
        with self._lock:
            return self.frontier.pop(vertex_id, None)


class DistanceAggregate:
    """Per-vertex sums and counts of finalized distances across runs."""

    def __init__(self) -> None:
        self._values: dict[int, VertexValue] = {}
        self._lock = threading.Lock()

    def record(self, vertex_id: int, distance: float) -> None:
        with self._lock:
            value = self._values.get(vertex_id)
            if value is None:
                value = self._values[vertex_id] = VertexValue()
            value.sum += distance
            value.count += 1

    def get(self, vertex_id: int) -> VertexValue | None:
        """Copy of the aggregate for one vertex, None if never finalized."""
        with self._lock:
            value = self._values.get(vertex_id)
            return None if value is None else VertexValue(value.sum, value.count)

    def mean(self, vertex_id: int) -> float | None:
        value = self.get(vertex_id)
        return None if value is None else value.mean

    def count(self, vertex_id: int) -> int:
        value = self.get(vertex_id)
        return 0 if value is None else value.count

    def top_k(self, k: int) -> list[tuple[int, float]]:
        """The k vertices with smallest mean distance, ties by ascending id."""
        with self._lock:
            ranked = [(value.sum / value.count, vertex_id) for vertex_id, value in self._values.items() if value.count]
        return [(vertex_id, mean) for mean, vertex_id in heapq.nsmallest(k, ranked)]

    def snapshot(self) -> dict[int, VertexValue]:
        with self._lock:
            return {vertex_id: VertexValue(v.sum, v.count) for vertex_id, v in self._values.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


@ProgramRegistry.register("knn")
class SamplingEngine(BaseProgram):
    """Estimate k nearest neighbors of a source on a probabilistic graph.

    Edges must carry SampledEdge payloads. The random source is owned by
    the engine and advanced across all draws and all runs; pass ``rng``
    or ``seed`` for reproducible sampling (with a single worker thread).
    """

    def __init__(
        self,
        source: int | None = None,
        *,
        k: int = 10,
        max_runs: int = 100,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if k < 0:
            msg = f"k must be non-negative, got {k}"
            raise ValueError(msg)
        if max_runs < 1:
            msg = f"max_runs must be at least 1, got {max_runs}"
            raise ValueError(msg)

        self._source = source
        self._k = k
        self._max_runs = max_runs
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._rng_lock = threading.Lock()

        self._runs: list[SamplingRun] = []
        self._runs_lock = threading.Lock()
        self._values = DistanceAggregate()
        self._launched = 0
        self._completed = 0
        self._launch_pending = False

    @property
    def name(self) -> str:
        return "knn"

    @property
    def values(self) -> DistanceAggregate:
        """Distance aggregate of the current run."""
        return self._values

    @property
    def runs_launched(self) -> int:
        return self._launched

    @property
    def runs_completed(self) -> int:
        return self._completed

    @property
    def live_runs(self) -> int:
        with self._runs_lock:
            return len(self._runs)

    def setup(self, graph: Graph) -> None:
        self._source = self._check_vertex(graph, self._source, "source")
        for source, target, data in graph.edges():
            if not isinstance(data, SampledEdge):
                msg = f"Edge {source}->{target} has payload {data!r}, expected SampledEdge"
                raise EdgeDataError(msg)

        with self._runs_lock:
            self._runs = []
        self._values = DistanceAggregate()
        self._launched = 0
        self._completed = 0
        self._launch_pending = False

    def bernoulli(self, p: float) -> bool:
        """Draw once from the shared random source; True with probability p."""
        with self._rng_lock:
            return self._rng.random() < p

    def update(self, vertex: Vertex, context: Context) -> None:
        vertex_id = vertex.id

        if context.iteration == 0:
            context.scheduler.remove(vertex_id, vertex_id)
            return

        if vertex_id == self._source and self._launch_pending:
            self._launch_pending = False
            self._start_run(vertex, context)

        with self._runs_lock:
            runs = list(self._runs)
        for run in runs:
            distance = run.take(vertex_id)
            if distance is None:
                continue
            self._values.record(vertex_id, distance)
            self._expand(run, vertex, distance, context)

        context.scheduler.remove(vertex_id, vertex_id)

    def _start_run(self, vertex: Vertex, context: Context) -> None:
        run = SamplingRun(run_id=self._launched, source=vertex.id, started_at=context.iteration)
        self._expand(run, vertex, 0.0, context)
        with self._runs_lock:
            self._runs.append(run)
        self._launched += 1
        logger.debug("Sampling run %d launched in iteration %d", run.run_id, context.iteration)

    def _expand(self, run: SamplingRun, vertex: Vertex, distance: float, context: Context) -> None:
        """Draw each out-edge of a finalized vertex and queue the sampled neighbors."""
        for edge in vertex.out_edges():
            data: SampledEdge = edge.get_data()
            if not self.bernoulli(data.p):
                continue
            reached = distance + data.w
            if run.push(edge.vertex_id, reached):
                edge.set_data(replace(data, iteration=context.iteration, s=reached))

    def after_iteration(self, iteration: int, context: Context) -> None:
        with self._runs_lock:
            runs = list(self._runs)

        for run in runs:
            frontier = run.advance()
            if not frontier:
                with self._runs_lock:
                    self._runs.remove(run)
                self._completed += 1
                logger.debug(
                    "Sampling run %d finished in iteration %d, %d vertices reached",
                    run.run_id,
                    iteration,
                    len(run.visited) - 1,
                )
                continue
            for vertex_id in frontier:
                context.scheduler.add(vertex_id)

        if self._launched < self._max_runs:
            self._launch_pending = True
            context.scheduler.add(self._source)
        elif self.live_runs == 0:
            logger.info(
                "Sampling finished: %d runs, %d vertices reached from %d",
                self._completed,
                len(self._values),
                self._source,
            )
            context.set_last_iteration(iteration)

    def top_k(self, k: int | None = None) -> list[tuple[int, float]]:
        """The k nearest vertices to the source as (vertex_id, mean_distance)."""
        return self._values.top_k(self._k if k is None else k)

    def outcome(self) -> dict[str, Any]:
        neighbors = []
        for vertex_id, mean in self.top_k():
            neighbors.append({"vertex": vertex_id, "mean_distance": mean, "samples": self._values.count(vertex_id)})
        return {
            "source": self._source,
            "runs_launched": self._launched,
            "runs_completed": self._completed,
            "vertices_reached": len(self._values),
            "top_k": neighbors,
        }

    def parameters(self) -> dict[str, Any]:
        return {"source": self._source, "k": self._k, "max_runs": self._max_runs, "seed": self._seed}
