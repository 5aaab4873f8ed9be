r"""
Tests for graph_vertex.engine.driver module.
"""

import logging
import threading
from typing import Any

import pytest

from graph_vertex.engine import Context, DriverConfig, IterationDriver
from graph_vertex.errors import VertexUpdateError
from graph_vertex.graph import Graph, Vertex
from graph_vertex.programs.base import BaseProgram
from graph_vertex.types import StopReason


class RecordingProgram(BaseProgram):
    """Records every hook call and update."""

    def __init__(self, *, deactivate: bool = False, finish_at: int | None = None) -> None:
        self.deactivate = deactivate
        self.finish_at = finish_at
        self.events: list[tuple[Any, ...]] = []
        self.setup_calls = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "recording"

    def setup(self, graph: Graph) -> None:
        self.setup_calls += 1

    def update(self, vertex: Vertex, context: Context) -> None:
        with self._lock:
            self.events.append(("update", context.iteration, vertex.id))
        if self.deactivate:
            context.scheduler.remove(vertex.id, vertex.id)

    def before_iteration(self, iteration: int, context: Context) -> None:
        self.events.append(("before_iteration", iteration))

    def after_iteration(self, iteration: int, context: Context) -> None:
        self.events.append(("after_iteration", iteration))
        if self.finish_at is not None and iteration == self.finish_at:
            context.set_last_iteration(iteration)

    def before_interval(self, lo: int, hi: int, context: Context) -> None:
        with self._lock:
            self.events.append(("before_interval", lo, hi))

    def after_interval(self, lo: int, hi: int, context: Context) -> None:
        with self._lock:
            self.events.append(("after_interval", lo, hi))

    def outcome(self) -> dict[str, Any]:
        return {}

    def updates(self, iteration: int) -> list[int]:
        return sorted(e[2] for e in self.events if e[0] == "update" and e[1] == iteration)


class WakeAheadProgram(BaseProgram):
    """Vertex 0 wakes vertex 2 in iteration 1; everyone deactivates."""

    def __init__(self) -> None:
        self.visits: list[tuple[int, int]] = []

    @property
    def name(self) -> str:
        return "wake_ahead"

    def update(self, vertex: Vertex, context: Context) -> None:
        self.visits.append((context.iteration, vertex.id))
        context.scheduler.remove(vertex.id, vertex.id)
        if context.iteration == 1 and vertex.id == 0:
            context.scheduler.add(2)

    def after_iteration(self, iteration: int, context: Context) -> None:
        if iteration == 0:
            context.scheduler.add(0)

    def outcome(self) -> dict[str, Any]:
        return {}


class FailingProgram(BaseProgram):
    def __init__(self, bad_vertex: int) -> None:
        self.bad_vertex = bad_vertex

    @property
    def name(self) -> str:
        return "failing"

    def update(self, vertex: Vertex, context: Context) -> None:
        if vertex.id == self.bad_vertex:
            raise KeyError("boom")

    def outcome(self) -> dict[str, Any]:
        return {}


@pytest.fixture
def ten_vertices() -> Graph:
    return Graph(10)


class TestDriverConfig:
    def test_defaults(self):
        config = DriverConfig()
        assert config.niters == 1000
        assert config.use_scheduler is True
        assert config.num_intervals == 1
        assert config.max_workers is None

    @pytest.mark.parametrize(
        "kwargs",
        [{"niters": -1}, {"num_intervals": 0}, {"max_workers": 0}],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            DriverConfig(**kwargs)


class TestIntervals:
    def test_single_interval(self, ten_vertices):
        driver = IterationDriver(ten_vertices, config=DriverConfig(num_intervals=1))
        assert driver.intervals() == [(0, 9)]

    def test_contiguous_windows(self, ten_vertices):
        driver = IterationDriver(ten_vertices, config=DriverConfig(num_intervals=3))
        assert driver.intervals() == [(0, 3), (4, 7), (8, 9)]

    def test_more_intervals_than_vertices(self):
        driver = IterationDriver(Graph(2), config=DriverConfig(num_intervals=5))
        assert driver.intervals() == [(0, 0), (1, 1)]

    def test_empty_graph(self):
        driver = IterationDriver(Graph(0), config=DriverConfig(num_intervals=4))
        assert driver.intervals() == []


class TestIterationDriver:
    def test_hook_order_single_interval(self):
        program = RecordingProgram(finish_at=0)
        IterationDriver(Graph(2), config=DriverConfig(niters=5)).run(program)

        assert program.events == [
            ("before_iteration", 0),
            ("before_interval", 0, 1),
            ("update", 0, 0),
            ("update", 0, 1),
            ("after_interval", 0, 1),
            ("after_iteration", 0),
        ]

    def test_setup_called_once_before_iteration(self, ten_vertices):
        program = RecordingProgram(finish_at=0)
        IterationDriver(ten_vertices).run(program)
        assert program.setup_calls == 1

    def test_iteration_cap(self, ten_vertices):
        program = RecordingProgram()
        summary = IterationDriver(ten_vertices, config=DriverConfig(niters=3)).run(program)

        assert summary.stop_reason == StopReason.ITERATION_CAP
        assert summary.iterations == 3
        assert summary.last_iteration == 2
        assert summary.updates == 30
        assert len(summary.iteration_ns) == 3

    def test_zero_iterations(self, ten_vertices):
        program = RecordingProgram()
        summary = IterationDriver(ten_vertices, config=DriverConfig(niters=0)).run(program)

        assert summary.iterations == 0
        assert summary.last_iteration == -1
        assert summary.stop_reason == StopReason.ITERATION_CAP
        assert program.events == []

    def test_program_finished(self, ten_vertices):
        program = RecordingProgram(finish_at=1)
        summary = IterationDriver(ten_vertices, config=DriverConfig(niters=10)).run(program)

        assert summary.stop_reason == StopReason.PROGRAM_FINISHED
        assert summary.iterations == 2
        assert summary.last_iteration == 1

    def test_no_active_tasks(self, ten_vertices):
        program = RecordingProgram(deactivate=True)
        summary = IterationDriver(ten_vertices, config=DriverConfig(niters=10)).run(program)

        assert summary.stop_reason == StopReason.NO_ACTIVE_TASKS
        assert summary.iterations == 1

    def test_logs_scheduled_count(self, ten_vertices, caplog):
        program = RecordingProgram(deactivate=True)
        with caplog.at_level(logging.DEBUG, logger="graph_vertex.engine.driver"):
            IterationDriver(ten_vertices, config=DriverConfig(niters=10)).run(program)

        assert any(m.endswith("ms, 0 vertices scheduled") for m in caplog.messages)

    def test_disabled_scheduler_runs_every_vertex(self, ten_vertices):
        program = RecordingProgram(deactivate=True)
        config = DriverConfig(niters=3, use_scheduler=False)
        summary = IterationDriver(ten_vertices, config=config).run(program)

        assert summary.stop_reason == StopReason.ITERATION_CAP
        assert program.updates(2) == list(range(10))

    def test_added_vertex_ahead_runs_in_same_pass(self):
        program = WakeAheadProgram()
        summary = IterationDriver(Graph(3), config=DriverConfig(niters=10)).run(program)

        iteration_1 = [v for i, v in program.visits if i == 1]
        assert iteration_1 == [0, 2]
        # Vertex 2 was added during iteration 1, so it runs again in iteration 2
        assert [v for i, v in program.visits if i == 2] == [2]
        assert summary.stop_reason == StopReason.NO_ACTIVE_TASKS
        assert summary.iterations == 3

    def test_context_exposed(self, ten_vertices):
        driver = IterationDriver(ten_vertices, config=DriverConfig(niters=2))
        assert driver.context is None
        driver.run(RecordingProgram())
        assert driver.context is not None
        assert driver.context.num_vertices == 10
        assert driver.context.num_iterations == 2


class TestParallelIntervals:
    def test_every_vertex_updated_once_per_iteration(self):
        graph = Graph(100)
        program = RecordingProgram()
        config = DriverConfig(niters=3, num_intervals=4, max_workers=4)
        summary = IterationDriver(graph, config=config).run(program)

        assert summary.updates == 300
        for iteration in range(3):
            assert program.updates(iteration) == list(range(100))

    def test_parallel_config_splits_work(self, ten_vertices, parallel_config):
        program = RecordingProgram(finish_at=0)
        driver = IterationDriver(ten_vertices, config=parallel_config)
        summary = driver.run(program)

        assert len(driver.intervals()) == 4
        assert summary.updates == 10
        assert program.updates(0) == list(range(10))

    def test_sequential_config_keeps_id_order(self, ten_vertices, sequential_config):
        program = RecordingProgram(finish_at=0)
        IterationDriver(ten_vertices, config=sequential_config).run(program)

        order = [e[2] for e in program.events if e[0] == "update"]
        assert order == list(range(10))

    def test_interval_hooks_per_interval(self, ten_vertices):
        program = RecordingProgram(finish_at=0)
        config = DriverConfig(niters=5, num_intervals=3, max_workers=3)
        IterationDriver(ten_vertices, config=config).run(program)

        before = sorted(e[1:] for e in program.events if e[0] == "before_interval")
        after = sorted(e[1:] for e in program.events if e[0] == "after_interval")
        assert before == [(0, 3), (4, 7), (8, 9)]
        assert after == before

    def test_iteration_hooks_bracket_intervals(self, ten_vertices):
        program = RecordingProgram(finish_at=0)
        config = DriverConfig(niters=5, num_intervals=3, max_workers=3)
        IterationDriver(ten_vertices, config=config).run(program)

        assert program.events[0] == ("before_iteration", 0)
        assert program.events[-1] == ("after_iteration", 0)


class TestUpdateFailure:
    def test_failure_aborts_run(self, ten_vertices):
        driver = IterationDriver(ten_vertices, config=DriverConfig(niters=5))
        with pytest.raises(VertexUpdateError) as exc_info:
            driver.run(FailingProgram(bad_vertex=3))

        assert exc_info.value.vertex_id == 3
        assert exc_info.value.iteration == 0
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_failure_in_parallel_interval(self, ten_vertices):
        config = DriverConfig(niters=5, num_intervals=3, max_workers=3)
        driver = IterationDriver(ten_vertices, config=config)
        with pytest.raises(VertexUpdateError) as exc_info:
            driver.run(FailingProgram(bad_vertex=8))

        assert exc_info.value.vertex_id == 8
