r"""
graph-vertex: vertex-centric iterative graph programs.

Runs scheduler-driven programs over a directed graph, one iteration
at a time, in parallel across intervals of vertex ids. Ships two
programs: directed reachability between two vertices, and k nearest
neighbors on a probabilistic graph by per-edge existence sampling.

    from graph_vertex import Graph, ReachabilityProgram, run_program

    graph = Graph.from_edges([(1, 2), (2, 3)], num_vertices=5)
    result = run_program(ReachabilityProgram(source=1, dest=3), graph)
    print(result.outcome["status"])  # Connected
"""

from graph_vertex.config import PROGRAM_DEFAULTS, get_defaults
from graph_vertex.engine import DriverConfig, IterationDriver, TaskScheduler
from graph_vertex.errors import EdgeDataError, GraphVertexError, InvalidQueryError, VertexUpdateError
from graph_vertex.graph import Graph
from graph_vertex.programs import ProgramRegistry, ReachabilityProgram, SamplingEngine
from graph_vertex.runner import run_program
from graph_vertex.types import ProgramResult, ReachabilityStatus, RunSummary, SampledEdge, StopReason, VertexValue

__all__ = [
    "DriverConfig",
    "EdgeDataError",
    "Graph",
    "GraphVertexError",
    "InvalidQueryError",
    "IterationDriver",
    "PROGRAM_DEFAULTS",
    "ProgramRegistry",
    "ProgramResult",
    "ReachabilityProgram",
    "ReachabilityStatus",
    "RunSummary",
    "SampledEdge",
    "SamplingEngine",
    "StopReason",
    "TaskScheduler",
    "VertexUpdateError",
    "VertexValue",
    "get_defaults",
    "run_program",
]

__version__ = "0.1.0"
