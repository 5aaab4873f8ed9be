r"""
Scheduler-driven iteration engine.

Runs vertex programs iteration by iteration over contiguous
intervals of vertex ids, in parallel across intervals.

    from graph_vertex.engine import IterationDriver, DriverConfig

    driver = IterationDriver(graph, config=DriverConfig(niters=50))
    summary = driver.run(program)
"""

from graph_vertex.engine.context import Context
from graph_vertex.engine.driver import DriverConfig, IterationDriver, default_workers
from graph_vertex.engine.scheduler import TaskScheduler
from graph_vertex.engine.timing import Stopwatch

__all__ = [
    "Context",
    "DriverConfig",
    "IterationDriver",
    "TaskScheduler",
    "Stopwatch",
    "default_workers",
]
