r"""
Core types for vertex-centric graph programs.

    from graph_vertex.types import RunSummary, SampledEdge, StopReason

    summary = driver.run(program)
    if summary.stop_reason == StopReason.PROGRAM_FINISHED:
        print(f"Finished after {summary.iterations} iterations")
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any

from graph_vertex.errors import EdgeDataError

__all__ = [
    "StopReason",
    "ReachabilityStatus",
    "SampledEdge",
    "VertexValue",
    "RunSummary",
    "ProgramResult",
]


class StopReason(IntEnum):
    """Why the iteration driver stopped."""

    ITERATION_CAP = auto()
    PROGRAM_FINISHED = auto()
    NO_ACTIVE_TASKS = auto()


class ReachabilityStatus(Enum):
    """Outcome of a reachability query.

    The value is the literal status line reported for the outcome.
    """

    CONNECTED = "Connected"
    NOT_CONNECTED = "Converged, not Connected"
    UNDECIDED = "Iteration limit reached, undecided"

    @property
    def decided(self) -> bool:
        """True once the query has a definite answer."""
        return self is not ReachabilityStatus.UNDECIDED


@dataclass(frozen=True, slots=True)
class SampledEdge:
    """Edge payload for probabilistic graphs.

    Attributes:
        p: Probability that the edge exists in a sample.
        w: Fixed cost of traversing the edge.
        iteration: Iteration in which the edge was last sampled (-1 if never).
        s: Sampled path length from the source through this edge.
    """

    p: float
    w: float = 1.0
    iteration: int = -1
    s: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.p <= 1.0:
            msg = f"Edge probability {self.p!r} outside [0, 1]"
            raise EdgeDataError(msg)
        if self.w < 0:
            msg = f"Edge weight {self.w!r} must be non-negative"
            raise EdgeDataError(msg)


@dataclass(slots=True)
class VertexValue:
    """Aggregate of finalized distances to one target vertex.

    Attributes:
        sum: Sum of all finalized distances.
        count: Number of finalizations across sampling runs.
    """

    sum: float = 0.0
    count: int = 0

    @property
    def mean(self) -> float | None:
        """Mean finalized distance, None before the first finalization."""
        if self.count == 0:
            return None
        return self.sum / self.count


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Result from one driver run.

    Attributes:
        iterations: Number of iterations executed.
        last_iteration: Index of the final iteration executed (-1 if none).
        stop_reason: Why the driver stopped.
        elapsed_ns: Wall-clock duration in nanoseconds.
        updates: Number of vertex updates executed.
        iteration_ns: Duration of each iteration in nanoseconds.
    """

    iterations: int
    last_iteration: int
    stop_reason: StopReason
    elapsed_ns: int = 0
    updates: int = 0
    iteration_ns: tuple[int, ...] = ()

    @property
    def elapsed_ms(self) -> float:
        """Duration in milliseconds."""
        return self.elapsed_ns / 1_000_000


@dataclass(frozen=True, slots=True)
class ProgramResult:
    """Outcome of running a program to completion.

    Attributes:
        program: Registered program name.
        summary: Driver run summary.
        outcome: Program specific outcome (status line, ranking, ...).
        parameters: Query parameters the program ran with.
    """

    program: str
    summary: RunSummary
    outcome: dict[str, Any] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
