r"""
Directed reachability between a source and a destination vertex.

The source label is pushed along out-edges one frontier at a time.
The run stops as soon as the destination sees the label on one of
its in-edges ("Connected"), or when an iteration propagates nothing
new ("Converged, not Connected").

    from graph_vertex.programs.reachability import ReachabilityProgram

    program = ReachabilityProgram(source=1, dest=3)
    IterationDriver(graph).run(program)
    print(program.status.value)
"""

import logging
from typing import Any

from graph_vertex.engine.context import Context
from graph_vertex.graph import Graph, Vertex
from graph_vertex.programs.base import BaseProgram, ProgramRegistry
from graph_vertex.types import ReachabilityStatus

__all__ = ["ReachabilityProgram"]

logger = logging.getLogger(__name__)


@ProgramRegistry.register("reachability")
class ReachabilityProgram(BaseProgram):
    """Answer whether a directed path leads from source to dest.

    Vertex payload is the label a vertex last propagated; its own id
    means unvisited. Edge payload is the label carried by the edge, or
    None. A query with source == dest is trivially connected.
    """

    def __init__(self, source: int | None = None, dest: int | None = None) -> None:
        self._source = source
        self._dest = dest
        self._terminate = False
        self._converged = True
        self._status = ReachabilityStatus.UNDECIDED
        self._decided_at: int | None = None

    @property
    def name(self) -> str:
        return "reachability"

    @property
    def status(self) -> ReachabilityStatus:
        """Outcome of the last run."""
        return self._status

    @property
    def decided_at(self) -> int | None:
        """Iteration in which the outcome was decided."""
        return self._decided_at

    def setup(self, graph: Graph) -> None:
        self._source = self._check_vertex(graph, self._source, "source")
        self._dest = self._check_vertex(graph, self._dest, "destination")
        self._terminate = False
        self._converged = True
        self._status = ReachabilityStatus.UNDECIDED
        self._decided_at = None

    def update(self, vertex: Vertex, context: Context) -> None:
        vertex_id = vertex.id
        scheduler = context.scheduler

        if context.iteration == 0:
            # Start from scratch: edge labels may be left over from a previous run
            vertex.set_data(vertex_id)
            for edge in vertex.out_edges():
                edge.set_data(None)
            scheduler.remove(vertex_id, vertex_id)
            return

        if vertex_id == self._source:
            self._propagate(vertex, context)
        elif vertex_id == self._dest:
            if any(edge.get_data() == self._source for edge in vertex.in_edges()):
                self._terminate = True
        elif vertex.get_data() != self._source:
            # First labeled in-edge is enough
            for edge in vertex.in_edges():
                if edge.get_data() == self._source:
                    vertex.set_data(self._source)
                    self._propagate(vertex, context)
                    break

        scheduler.remove(vertex_id, vertex_id)

    def _propagate(self, vertex: Vertex, context: Context) -> None:
        """Label every out-edge with the source and wake the neighbors."""
        for edge in vertex.out_edges():
            edge.set_data(self._source)
            if edge.vertex_id != vertex.id:
                context.scheduler.add(edge.vertex_id)
        self._converged = False

    def before_iteration(self, iteration: int, context: Context) -> None:
        self._terminate = False
        self._converged = True

    def after_iteration(self, iteration: int, context: Context) -> None:
        if iteration == 0:
            if self._source == self._dest:
                self._report(ReachabilityStatus.CONNECTED, iteration, context)
            else:
                context.scheduler.add(self._source)
            return

        if self._terminate:
            self._report(ReachabilityStatus.CONNECTED, iteration, context)
        elif self._converged or len(context.scheduler) == 0:
            # Nothing scheduled means nothing left to propagate
            self._report(ReachabilityStatus.NOT_CONNECTED, iteration, context)

    def _report(self, status: ReachabilityStatus, iteration: int, context: Context) -> None:
        self._status = status
        self._decided_at = iteration
        logger.info(status.value)
        context.set_last_iteration(iteration)

    def outcome(self) -> dict[str, Any]:
        return {
            "status": self._status.value,
            "connected": self._status is ReachabilityStatus.CONNECTED,
            "decided": self._status.decided,
            "decided_at": self._decided_at,
        }

    def parameters(self) -> dict[str, Any]:
        return {"source": self._source, "dest": self._dest}
