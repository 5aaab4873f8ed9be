r"""
Base graph loader interface.

    from graph_vertex.datasets.base import BaseGraphLoader
"""

from abc import ABC, abstractmethod

from graph_vertex.graph import Graph

__all__ = ["BaseGraphLoader"]


class BaseGraphLoader(ABC):
    """Base class for graph loaders."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Dataset name."""
        ...

    @abstractmethod
    def load(self) -> Graph:
        """Build the graph."""
        ...
