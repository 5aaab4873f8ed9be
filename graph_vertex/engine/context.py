r"""
Iteration context shared by program hooks and vertex updates.

    from graph_vertex.engine.context import Context

    def after_iteration(self, iteration, context):
        context.set_last_iteration(iteration)
"""

from dataclasses import dataclass

from graph_vertex.engine.scheduler import TaskScheduler

__all__ = ["Context"]


@dataclass
class Context:
    """State of a running program.

    Attributes:
        scheduler: Task scheduler for the run.
        num_iterations: Iteration budget.
        num_vertices: Size of the vertex id space.
        iteration: Index of the iteration being executed.
        last_iteration: Iteration after which the run ends (None = budget).
    """

    scheduler: TaskScheduler
    num_iterations: int
    num_vertices: int
    iteration: int = 0
    last_iteration: int | None = None

    def set_last_iteration(self, iteration: int) -> None:
        """End the run once the given iteration completes."""
        self.last_iteration = iteration

    @property
    def finished(self) -> bool:
        """True once the current iteration is the last one requested."""
        return self.last_iteration is not None and self.iteration >= self.last_iteration
