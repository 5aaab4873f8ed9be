r"""
Vertex programs for graph-vertex.

Programs are registered by name and selected at startup:
- reachability: directed reachability between two vertices
- knn: k nearest neighbors on a probabilistic graph by edge sampling

    from graph_vertex.programs import ProgramRegistry

    program = ProgramRegistry.create("reachability", source=1, dest=3)
"""

from graph_vertex.programs.base import BaseProgram, ProgramRegistry
from graph_vertex.programs.reachability import ReachabilityProgram
from graph_vertex.programs.sampling import DistanceAggregate, SamplingEngine, SamplingRun

__all__ = [
    "BaseProgram",
    "DistanceAggregate",
    "ProgramRegistry",
    "ReachabilityProgram",
    "SamplingEngine",
    "SamplingRun",
]
