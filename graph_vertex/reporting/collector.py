r"""
Result collection.

    from graph_vertex.reporting.collector import ResultCollector

    collector = ResultCollector()
    collector.start_session(graph="graph.txt")
    collector.add_result(result)
"""

import platform
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import psutil

from graph_vertex.types import ProgramResult

__all__ = ["ResultCollector", "SessionInfo", "EnvironmentInfo"]


@dataclass
class SessionInfo:
    """Information about a session of program runs.

    Attributes:
        session_id: Unique session identifier.
        started_at: Session start timestamp.
        completed_at: Session end timestamp (empty if ongoing).
        graph: Name of the input graph.
    """

    session_id: str = ""
    started_at: str = ""
    completed_at: str = ""
    graph: str = ""


@dataclass
class EnvironmentInfo:
    """Information about the machine the programs ran on.

    Attributes:
        platform: Operating system platform.
        python_version: Python version string.
        cpu_count: Logical CPU count.
        memory_gb: Total memory in GB.
    """

    platform: str = ""
    python_version: str = ""
    cpu_count: int = 0
    memory_gb: float = 0.0


class ResultCollector:
    """Collects program results for export."""

    def __init__(self) -> None:
        self._results: list[ProgramResult] = []
        self._session = SessionInfo()
        self._environment = EnvironmentInfo()

    def start_session(self, *, graph: str) -> None:
        """Start a new session."""
        started_at = datetime.now(UTC)
        self._session = SessionInfo(
            session_id=f"run_{started_at.strftime('%Y%m%d_%H%M%S')}",
            started_at=started_at.isoformat(),
            graph=graph,
        )
        self._environment = EnvironmentInfo(
            platform=platform.system().lower(),
            python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            cpu_count=psutil.cpu_count() or 0,
            memory_gb=round(psutil.virtual_memory().total / (1024**3), 1),
        )

    def end_session(self) -> None:
        """End the current session."""
        self._session.completed_at = datetime.now(UTC).isoformat()

    def add_result(self, result: ProgramResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> list[ProgramResult]:
        return self._results

    @property
    def session(self) -> SessionInfo:
        return self._session

    @property
    def environment(self) -> EnvironmentInfo:
        return self._environment

    def get_results_by_program(self, program: str) -> list[ProgramResult]:
        return [r for r in self._results if r.program == program]

    def to_dict(self) -> dict[str, Any]:
        """Convert collected data to dictionary."""
        return {
            "session": {
                "id": self._session.session_id,
                "started_at": self._session.started_at,
                "completed_at": self._session.completed_at,
                "graph": self._session.graph,
            },
            "environment": {
                "platform": self._environment.platform,
                "python_version": self._environment.python_version,
                "cpu_count": self._environment.cpu_count,
                "memory_gb": self._environment.memory_gb,
            },
            "results": [self._result_to_dict(r) for r in self._results],
        }

    def _result_to_dict(self, result: ProgramResult) -> dict[str, Any]:
        summary = result.summary
        return {
            "program": result.program,
            "parameters": result.parameters,
            "run": {
                "iterations": summary.iterations,
                "last_iteration": summary.last_iteration,
                "stop_reason": summary.stop_reason.name,
                "elapsed_ns": summary.elapsed_ns,
                "updates": summary.updates,
            },
            "outcome": result.outcome,
        }
