r"""
Edge-list files.

One edge per line, whitespace separated, '#' starts a comment:

    # source target [probability]
    0 1 0.5
    1 2 0.9

Repeated lines are kept as parallel edges.
Plain graphs (reachability) ignore any columns after the endpoints.
Probabilistic graphs (knn) require the probability column; every
probability is validated as the edge is loaded.

    from graph_vertex.datasets.edgelist import EdgeListLoader

    graph = EdgeListLoader("graph.txt", probabilistic=True).load()
"""

from pathlib import Path

import networkx as nx

from graph_vertex.datasets.base import BaseGraphLoader
from graph_vertex.errors import EdgeDataError
from graph_vertex.graph import Graph
from graph_vertex.types import SampledEdge

__all__ = ["EdgeListLoader", "write_edge_list"]


class EdgeListLoader(BaseGraphLoader):
    """Load a directed graph from an edge-list file."""

    def __init__(
        self,
        path: str | Path,
        *,
        probabilistic: bool = False,
        weight: float = 1.0,
        num_vertices: int = 0,
    ) -> None:
        """Initialize loader.

        Args:
            path: Edge-list file.
            probabilistic: Read a probability column into SampledEdge payloads.
            weight: Fixed weight of every edge of a probabilistic graph.
            num_vertices: Minimum id space, for isolated high-id vertices.
        """
        self._path = Path(path)
        self._probabilistic = probabilistic
        self._weight = weight
        self._num_vertices = num_vertices

    @property
    def name(self) -> str:
        return self._path.stem

    def load(self) -> Graph:
        if not self._path.exists():
            msg = f"Edge list not found: {self._path}"
            raise FileNotFoundError(msg)

        data: bool | tuple[tuple[str, type], ...] = (("p", float),) if self._probabilistic else False
        try:
            G = nx.read_edgelist(
                self._path,
                comments="#",
                create_using=nx.MultiDiGraph,
                nodetype=int,
                data=data,
            )
        except (IndexError, TypeError, ValueError) as e:
            msg = f"Malformed edge list {self._path}: {e}"
            raise EdgeDataError(msg) from e

        negative = sorted(n for n in G.nodes() if n < 0)
        if negative:
            msg = f"Negative vertex ids in {self._path}: {negative}"
            raise EdgeDataError(msg)

        if not self._probabilistic:
            return Graph.from_networkx(G, num_vertices=self._num_vertices)

        return Graph.from_networkx(G, edge_data=self._sampled_edge, num_vertices=self._num_vertices)

    def _sampled_edge(self, attrs: dict[str, float]) -> SampledEdge:
        # networkx accepts a bare "u v" line even when a data column is requested
        if "p" not in attrs:
            msg = f"Edge without probability in {self._path}"
            raise EdgeDataError(msg)
        return SampledEdge(p=attrs["p"], w=self._weight)


def write_edge_list(graph: Graph, path: str | Path) -> None:
    """Write a graph as an edge list, with probabilities for SampledEdge payloads."""
    G = nx.MultiDiGraph()
    G.add_nodes_from(range(graph.num_vertices))
    probabilistic = False
    for source, target, data in graph.edges():
        if isinstance(data, SampledEdge):
            probabilistic = True
            G.add_edge(source, target, p=data.p)
        else:
            G.add_edge(source, target)
    nx.write_edgelist(G, Path(path), data=["p"] if probabilistic else False)
