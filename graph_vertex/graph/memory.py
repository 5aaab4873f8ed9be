r"""
In-memory directed graph store.

Vertices are integer ids in [0, num_vertices). Every edge carries one
mutable payload shared by both endpoints: the source sees it as an
out-edge, the target as an in-edge.

    from graph_vertex.graph import Graph

    graph = Graph.from_edges([(1, 2), (2, 3)], num_vertices=5)
    vertex = graph.vertex(2)
    print(vertex.num_in_edges, vertex.out_edge(0).vertex_id)
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import networkx as nx

__all__ = ["Graph", "Vertex", "Edge"]


@dataclass(slots=True)
class _EdgeRecord:
    source: int
    target: int
    data: Any = None


class Edge:
    """Edge accessor seen from one endpoint."""

    __slots__ = ("_record", "_other")

    def __init__(self, record: _EdgeRecord, other: int) -> None:
        self._record = record
        self._other = other

    @property
    def vertex_id(self) -> int:
        """Id of the vertex at the other end."""
        return self._other

    def get_data(self) -> Any:
        return self._record.data

    def set_data(self, value: Any) -> None:
        self._record.data = value

    def __repr__(self) -> str:
        return f"Edge({self._record.source}->{self._record.target}, data={self._record.data!r})"


class Vertex:
    """Vertex accessor handed to update functions."""

    __slots__ = ("_graph", "_id")

    def __init__(self, graph: "Graph", vertex_id: int) -> None:
        self._graph = graph
        self._id = vertex_id

    @property
    def id(self) -> int:
        return self._id

    @property
    def num_in_edges(self) -> int:
        return len(self._graph._in[self._id])

    @property
    def num_out_edges(self) -> int:
        return len(self._graph._out[self._id])

    @property
    def num_edges(self) -> int:
        return self.num_in_edges + self.num_out_edges

    def get_data(self) -> Any:
        return self._graph._vertex_data[self._id]

    def set_data(self, value: Any) -> None:
        self._graph._vertex_data[self._id] = value

    def in_edge(self, i: int) -> Edge:
        record = self._graph._edges[self._graph._in[self._id][i]]
        return Edge(record, record.source)

    def out_edge(self, i: int) -> Edge:
        record = self._graph._edges[self._graph._out[self._id][i]]
        return Edge(record, record.target)

    def in_edges(self) -> Iterator[Edge]:
        """Iterate incoming edges."""
        for i in range(self.num_in_edges):
            yield self.in_edge(i)

    def out_edges(self) -> Iterator[Edge]:
        """Iterate outgoing edges."""
        for i in range(self.num_out_edges):
            yield self.out_edge(i)

    def __repr__(self) -> str:
        return f"Vertex({self._id}, data={self.get_data()!r})"


class Graph:
    """Directed multigraph held in memory.

    Payload validation happens where edges are added: build payloads with a
    validating type (e.g. SampledEdge) so bad data is rejected at load time.
    """

    def __init__(self, num_vertices: int = 0, *, vertex_data: Any = None) -> None:
        if num_vertices < 0:
            msg = f"num_vertices must be non-negative, got {num_vertices}"
            raise ValueError(msg)
        self._vertex_data: list[Any] = [vertex_data] * num_vertices
        self._edges: list[_EdgeRecord] = []
        self._out: list[list[int]] = [[] for _ in range(num_vertices)]
        self._in: list[list[int]] = [[] for _ in range(num_vertices)]

    @property
    def num_vertices(self) -> int:
        return len(self._vertex_data)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def add_vertex(self, data: Any = None) -> int:
        """Append a vertex and return its id."""
        self._vertex_data.append(data)
        self._out.append([])
        self._in.append([])
        return len(self._vertex_data) - 1

    def ensure_vertex(self, vertex_id: int) -> None:
        """Grow the id space so that vertex_id exists."""
        if vertex_id < 0:
            msg = f"Vertex ids must be non-negative, got {vertex_id}"
            raise ValueError(msg)
        while self.num_vertices <= vertex_id:
            self.add_vertex()

    def add_edge(self, source: int, target: int, data: Any = None) -> None:
        """Add a directed edge, growing the id space as needed."""
        if min(source, target) < 0:
            msg = f"Vertex ids must be non-negative, got {source}->{target}"
            raise ValueError(msg)
        self.ensure_vertex(max(source, target))
        index = len(self._edges)
        self._edges.append(_EdgeRecord(source, target, data))
        self._out[source].append(index)
        self._in[target].append(index)

    def has_vertex(self, vertex_id: int) -> bool:
        return 0 <= vertex_id < self.num_vertices

    def vertex(self, vertex_id: int) -> Vertex:
        """Get the accessor for a vertex."""
        if not self.has_vertex(vertex_id):
            msg = f"Vertex {vertex_id} not in graph of {self.num_vertices} vertices"
            raise IndexError(msg)
        return Vertex(self, vertex_id)

    def vertex_data(self, vertex_id: int) -> Any:
        return self._vertex_data[vertex_id]

    def edges(self) -> Iterator[tuple[int, int, Any]]:
        """Iterate (source, target, payload) triples."""
        for record in self._edges:
            yield record.source, record.target, record.data

    def successors(self, vertex_id: int) -> list[int]:
        return [self._edges[i].target for i in self._out[vertex_id]]

    def map_edge_data(self, func: Callable[[Any], Any]) -> None:
        """Replace every edge payload with func(payload)."""
        for record in self._edges:
            record.data = func(record.data)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[int, int] | tuple[int, int, Any]],
        *,
        num_vertices: int = 0,
    ) -> "Graph":
        """Build a graph from (source, target[, payload]) tuples.

        Args:
            edges: Edge tuples.
            num_vertices: Minimum id space; isolated vertices below this exist.

        Returns:
            New Graph.
        """
        graph = cls(num_vertices)
        for edge in edges:
            if len(edge) == 2:
                source, target = edge  # type: ignore[misc]
                data = None
            else:
                source, target, data = edge  # type: ignore[misc]
            graph.add_edge(int(source), int(target), data)
        return graph

    @classmethod
    def from_networkx(
        cls,
        G: Any,
        *,
        edge_data: Callable[[dict[str, Any]], Any] | None = None,
        num_vertices: int = 0,
    ) -> "Graph":
        """Build a graph from a networkx graph with integer node labels.

        Undirected graphs contribute one edge per direction.

        Args:
            G: networkx Graph or DiGraph.
            edge_data: Maps the networkx edge attribute dict to a payload.
            num_vertices: Minimum id space.

        Returns:
            New Graph.
        """
        size = max(num_vertices, max((int(n) for n in G.nodes()), default=-1) + 1)
        graph = cls(size)
        for u, v, attrs in G.edges(data=True):
            data = edge_data(attrs) if edge_data else None
            graph.add_edge(int(u), int(v), data)
            if not G.is_directed():
                data = edge_data(attrs) if edge_data else None
                graph.add_edge(int(v), int(u), data)
        return graph

    def to_networkx(self) -> nx.DiGraph:
        """Export as a networkx DiGraph; payloads are stored under 'data'."""
        G = nx.DiGraph()
        G.add_nodes_from(range(self.num_vertices))
        for source, target, data in self.edges():
            G.add_edge(source, target, data=data)
        return G

    def __repr__(self) -> str:
        return f"Graph(vertices={self.num_vertices}, edges={self.num_edges})"
