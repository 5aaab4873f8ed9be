r"""
Exceptions raised by graph-vertex.

    from graph_vertex.errors import InvalidQueryError

    try:
        program.setup(graph)
    except InvalidQueryError as e:
        print(e)
"""

__all__ = [
    "GraphVertexError",
    "InvalidQueryError",
    "EdgeDataError",
    "VertexUpdateError",
]


class GraphVertexError(Exception):
    """Base class for graph-vertex errors."""


class InvalidQueryError(GraphVertexError, ValueError):
    """Query vertex id missing or outside the graph."""


class EdgeDataError(GraphVertexError, ValueError):
    """Edge payload failed validation while loading."""


class VertexUpdateError(GraphVertexError, RuntimeError):
    """A vertex update or interval hook failed, aborting the run.

    Attributes:
        vertex_id: Vertex being updated when the failure happened, if known.
        iteration: Iteration in which the failure happened.
    """

    def __init__(self, message: str, *, vertex_id: int | None = None, iteration: int | None = None) -> None:
        super().__init__(message)
        self.vertex_id = vertex_id
        self.iteration = iteration
