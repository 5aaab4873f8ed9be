r"""
Command-line interface for graph-vertex.

    graph-vertex --help
"""

from graph_vertex.cli.main import app, main

__all__ = ["app", "main"]
