r"""
Graph loaders for graph-vertex.

Available loaders:
    - EdgeListLoader: edge-list files, optionally with edge probabilities
    - SyntheticProbabilisticGraph: seeded random probabilistic graphs

    from graph_vertex.datasets import EdgeListLoader

    graph = EdgeListLoader("graph.txt").load()
"""

from graph_vertex.datasets.base import BaseGraphLoader
from graph_vertex.datasets.edgelist import EdgeListLoader, write_edge_list
from graph_vertex.datasets.synthetic import SyntheticProbabilisticGraph

__all__ = [
    "BaseGraphLoader",
    "EdgeListLoader",
    "SyntheticProbabilisticGraph",
    "write_edge_list",
]
