r"""
Graph storage for graph-vertex.

    from graph_vertex.graph import Graph

    graph = Graph.from_edges([(0, 1), (1, 2)])
"""

from graph_vertex.graph.memory import Edge, Graph, Vertex

__all__ = ["Edge", "Graph", "Vertex"]
