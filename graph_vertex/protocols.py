r"""
Protocol definitions for vertex programs and the engine they run on.

All programs must implement the VertexProgram protocol.
Graph stores hand programs objects satisfying GraphVertex and GraphEdge.

    from graph_vertex.protocols import VertexProgram, GraphVertex

    class MyProgram(VertexProgram):
        ...
"""

from typing import Any, Protocol, runtime_checkable

__all__ = [
    "GraphEdge",
    "GraphVertex",
    "Scheduler",
    "IterationContext",
    "VertexProgram",
]


@runtime_checkable
class GraphEdge(Protocol):
    """Edge as seen from one of its endpoints."""

    @property
    def vertex_id(self) -> int:
        """Id of the vertex at the other end of the edge."""
        ...

    def get_data(self) -> Any:
        """Edge payload."""
        ...

    def set_data(self, value: Any) -> None:
        """Replace the edge payload."""
        ...


@runtime_checkable
class GraphVertex(Protocol):
    """Vertex accessor handed to update functions."""

    @property
    def id(self) -> int:
        """Vertex id."""
        ...

    @property
    def num_in_edges(self) -> int:
        """Number of incoming edges."""
        ...

    @property
    def num_out_edges(self) -> int:
        """Number of outgoing edges."""
        ...

    def get_data(self) -> Any:
        """Vertex payload."""
        ...

    def set_data(self, value: Any) -> None:
        """Replace the vertex payload."""
        ...

    def in_edge(self, i: int) -> GraphEdge:
        """The i-th incoming edge."""
        ...

    def out_edge(self, i: int) -> GraphEdge:
        """The i-th outgoing edge."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Task set of vertices active in the next iteration."""

    def add(self, vertex_id: int) -> None:
        """Activate a vertex."""
        ...

    def remove(self, lo: int, hi: int) -> None:
        """Deactivate every vertex id in [lo, hi]."""
        ...

    def is_active(self, vertex_id: int) -> bool:
        """Whether the vertex is scheduled."""
        ...


@runtime_checkable
class IterationContext(Protocol):
    """Per-run context shared by every hook and update."""

    iteration: int
    num_iterations: int
    num_vertices: int

    @property
    def scheduler(self) -> Scheduler:
        """Task scheduler for the run."""
        ...

    def set_last_iteration(self, iteration: int) -> None:
        """End the run after the given iteration."""
        ...


@runtime_checkable
class VertexProgram(Protocol):
    """Protocol for vertex-centric programs."""

    @property
    def name(self) -> str:
        """Program name."""
        ...

    def setup(self, graph: Any) -> None:
        """Validate parameters against the graph and reset state before a run."""
        ...

    def update(self, vertex: GraphVertex, context: IterationContext) -> None:
        """Process one active vertex."""
        ...

    def before_iteration(self, iteration: int, context: IterationContext) -> None:
        """Called before an iteration starts."""
        ...

    def after_iteration(self, iteration: int, context: IterationContext) -> None:
        """Called after an iteration has finished."""
        ...

    def before_interval(self, lo: int, hi: int, context: IterationContext) -> None:
        """Called before an interval of vertex ids is processed."""
        ...

    def after_interval(self, lo: int, hi: int, context: IterationContext) -> None:
        """Called after an interval of vertex ids has been processed."""
        ...
