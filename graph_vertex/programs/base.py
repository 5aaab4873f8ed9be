r"""
Base vertex program implementation.

Provides no-op lifecycle hooks and the registry used to pick a
program by name at startup.

    from graph_vertex.programs.base import BaseProgram, ProgramRegistry

    @ProgramRegistry.register("my_program")
    class MyProgram(BaseProgram):
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from graph_vertex.errors import InvalidQueryError
from graph_vertex.graph import Graph, Vertex
from graph_vertex.engine.context import Context

__all__ = ["BaseProgram", "ProgramRegistry"]


class ProgramRegistry:
    """Registry for vertex program implementations."""

    _programs: dict[str, type[BaseProgram]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a program class."""

        def decorator(program_cls: type[BaseProgram]) -> type[BaseProgram]:
            cls._programs[name] = program_cls
            return program_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseProgram] | None:
        """Get program class by name."""
        return cls._programs.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered program names."""
        return list(cls._programs.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> BaseProgram:
        """Create program instance by name."""
        program_cls = cls.get(name)
        if program_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown program '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return program_cls(**kwargs)


class BaseProgram(ABC):
    """Base class for vertex programs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Program name."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description."""
        return self.__class__.__doc__ or self.name

    def setup(self, graph: Graph) -> None:
        """Validate parameters against the graph and reset state before a run."""
        pass

    @abstractmethod
    def update(self, vertex: Vertex, context: Context) -> None:
        """Process one active vertex."""
        ...

    def before_iteration(self, iteration: int, context: Context) -> None:
        pass

    def after_iteration(self, iteration: int, context: Context) -> None:
        pass

    def before_interval(self, lo: int, hi: int, context: Context) -> None:
        pass

    def after_interval(self, lo: int, hi: int, context: Context) -> None:
        pass

    @abstractmethod
    def outcome(self) -> dict[str, Any]:
        """Program result after a run, as plain data."""
        ...

    def parameters(self) -> dict[str, Any]:
        """Query parameters, as plain data."""
        return {}

    @staticmethod
    def _check_vertex(graph: Graph, vertex_id: Any, role: str) -> int:
        """Validate a query vertex id against the graph."""
        if vertex_id is None:
            msg = f"Missing {role} vertex id"
            raise InvalidQueryError(msg)
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
            msg = f"{role.capitalize()} vertex id must be an integer, got {vertex_id!r}"
            raise InvalidQueryError(msg)
        if not graph.has_vertex(vertex_id):
            msg = f"{role.capitalize()} vertex {vertex_id} not in graph of {graph.num_vertices} vertices"
            raise InvalidQueryError(msg)
        return vertex_id

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters().items())
        return f"{self.__class__.__name__}({params})"
