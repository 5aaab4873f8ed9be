r"""
Run a program on a graph and collect its result.

    from graph_vertex.runner import run_program

    result = run_program(ReachabilityProgram(source=1, dest=3), graph)
    print(result.outcome["status"])
"""

import logging

from graph_vertex.engine import DriverConfig, IterationDriver
from graph_vertex.graph import Graph
from graph_vertex.programs.base import BaseProgram
from graph_vertex.types import ProgramResult

__all__ = ["run_program"]

logger = logging.getLogger(__name__)


def run_program(program: BaseProgram, graph: Graph, *, config: DriverConfig | None = None) -> ProgramResult:
    """Run a program to completion.

    Args:
        program: Program to run; its parameters are validated before iteration 0.
        graph: Graph to run on.
        config: Driver configuration (None = defaults).

    Returns:
        ProgramResult with the run summary and program outcome.

    Raises:
        InvalidQueryError: If the program's query ids do not fit the graph.
        VertexUpdateError: If any vertex update fails.
    """
    driver = IterationDriver(graph, config=config)
    summary = driver.run(program)
    logger.debug("%r finished in %.3fms", program, summary.elapsed_ms)
    return ProgramResult(
        program=program.name,
        summary=summary,
        outcome=program.outcome(),
        parameters=program.parameters(),
    )
