r"""
Shared pytest fixtures for graph-vertex tests.
"""

import pytest

from graph_vertex.engine import DriverConfig
from graph_vertex.graph import Graph
from graph_vertex.types import SampledEdge


@pytest.fixture
def chain_graph() -> Graph:
    """Edges 1->2, 2->3; vertices 0 and 4 isolated."""
    return Graph.from_edges([(1, 2), (2, 3)], num_vertices=5)


@pytest.fixture
def cyclic_graph() -> Graph:
    """Cycle 0->1->2->0 with a tail 2->3 and an unreachable 4->0."""
    return Graph.from_edges([(0, 1), (1, 2), (2, 0), (2, 3), (4, 0)])


@pytest.fixture
def sequential_config() -> DriverConfig:
    """Single interval on a single worker."""
    return DriverConfig(niters=100, num_intervals=1, max_workers=1)


@pytest.fixture
def parallel_config() -> DriverConfig:
    """Several intervals processed by several threads."""
    return DriverConfig(niters=100, num_intervals=4, max_workers=4)


@pytest.fixture
def certain_graph() -> Graph:
    """Probabilistic graph where every edge exists.

    0->1, 0->2, 1->3, 2->3, 3->4, 5->0 (5 unreachable from 0).
    """
    edges = [(0, 1), (0, 2), (1, 3), (2, 3), (3, 4), (5, 0)]
    return Graph.from_edges([(u, v, SampledEdge(p=1.0)) for u, v in edges])


@pytest.fixture
def coin_graph() -> Graph:
    """0->1 exists half the time; the detour 0->2->1 always exists."""
    return Graph.from_edges([
        (0, 1, SampledEdge(p=0.5)),
        (0, 2, SampledEdge(p=1.0)),
        (2, 1, SampledEdge(p=1.0)),
    ])
