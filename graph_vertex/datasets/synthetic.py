r"""
Synthetic probabilistic graph generator.

Generates a random directed graph (networkx G(n, m)) whose edges carry
existence probabilities drawn uniformly from [p_min, p_max].

    from graph_vertex.datasets.synthetic import SyntheticProbabilisticGraph

    graph = SyntheticProbabilisticGraph(num_vertices=1000, num_edges=5000, seed=42).load()
"""

import random

import networkx as nx

from graph_vertex.datasets.base import BaseGraphLoader
from graph_vertex.graph import Graph
from graph_vertex.types import SampledEdge

__all__ = ["SyntheticProbabilisticGraph"]


class SyntheticProbabilisticGraph(BaseGraphLoader):
    """Random directed graph with per-edge existence probabilities."""

    def __init__(
        self,
        *,
        num_vertices: int,
        num_edges: int,
        p_min: float = 0.0,
        p_max: float = 1.0,
        weight: float = 1.0,
        seed: int | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            num_vertices: Number of vertices.
            num_edges: Number of distinct directed edges.
            p_min: Lower bound of edge probabilities.
            p_max: Upper bound of edge probabilities.
            weight: Fixed weight of every edge.
            seed: Random seed for reproducibility.
        """
        if not 0.0 <= p_min <= p_max <= 1.0:
            msg = f"Need 0 <= p_min <= p_max <= 1, got p_min={p_min}, p_max={p_max}"
            raise ValueError(msg)
        self._num_vertices = num_vertices
        self._num_edges = num_edges
        self._p_min = p_min
        self._p_max = p_max
        self._weight = weight
        self._seed = seed

    @property
    def name(self) -> str:
        return "synthetic_probabilistic"

    def load(self) -> Graph:
        rng = random.Random(self._seed)
        G = nx.gnm_random_graph(self._num_vertices, self._num_edges, seed=self._seed, directed=True)

        # Sort so probabilities do not depend on networkx's edge iteration order
        graph = Graph(self._num_vertices)
        for source, target in sorted(G.edges()):
            p = round(rng.uniform(self._p_min, self._p_max), 4)
            graph.add_edge(source, target, SampledEdge(p=p, w=self._weight))
        return graph
