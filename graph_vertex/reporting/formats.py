r"""
Export formats for program results.

    from graph_vertex.reporting.formats import JsonExporter, MarkdownExporter

    exporter = JsonExporter()
    exporter.export(collector, "results.json")
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from graph_vertex.reporting.collector import ResultCollector
from graph_vertex.types import ProgramResult

__all__ = ["BaseExporter", "JsonExporter", "CsvExporter", "MarkdownExporter"]


class BaseExporter(ABC):
    """Base class for result exporters."""

    def export(self, collector: ResultCollector, path: str | Path) -> None:
        """Export results to file."""
        Path(path).write_text(self.to_string(collector))

    @abstractmethod
    def to_string(self, collector: ResultCollector) -> str:
        """Export results to string."""
        ...


class JsonExporter(BaseExporter):
    """Export results to JSON format."""

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def to_string(self, collector: ResultCollector) -> str:
        return json.dumps(collector.to_dict(), indent=self._indent)


class CsvExporter(BaseExporter):
    """Export results to CSV format.

    Reachability results produce one row with the status; knn results
    produce one row per ranked neighbor.
    """

    HEADER = "session_id,program,iterations,stop_reason,elapsed_ms,status,rank,vertex,mean_distance,samples"

    def to_string(self, collector: ResultCollector) -> str:
        lines = [self.HEADER]
        session_id = collector.session.session_id

        for result in collector.results:
            prefix = [
                session_id,
                result.program,
                str(result.summary.iterations),
                result.summary.stop_reason.name,
                f"{result.summary.elapsed_ms:.3f}",
            ]
            neighbors = result.outcome.get("top_k")
            if neighbors is None:
                lines.append(",".join([*prefix, result.outcome.get("status", ""), "", "", "", ""]))
                continue
            for rank, neighbor in enumerate(neighbors, start=1):
                lines.append(
                    ",".join([
                        *prefix,
                        "",
                        str(rank),
                        str(neighbor["vertex"]),
                        f"{neighbor['mean_distance']:.6f}",
                        str(neighbor["samples"]),
                    ])
                )

        return "\n".join(lines)


class MarkdownExporter(BaseExporter):
    """Export results to Markdown format."""

    def to_string(self, collector: ResultCollector) -> str:
        lines: list[str] = []
        session = collector.session
        env = collector.environment

        lines.append("# Graph Program Report")
        lines.append("")
        lines.append(f"**Session:** {session.session_id}")
        lines.append(f"**Graph:** {session.graph}")
        lines.append(f"**Date:** {session.started_at[:10] if session.started_at else 'N/A'}")
        lines.append("")

        lines.append("## Environment")
        lines.append("")
        lines.append(f"- Platform: {env.platform}")
        lines.append(f"- Python: {env.python_version}")
        lines.append(f"- CPUs: {env.cpu_count}")
        lines.append(f"- Memory: {env.memory_gb} GB")
        lines.append("")

        for result in collector.results:
            self._add_result(result, lines)

        return "\n".join(lines)

    def _add_result(self, result: ProgramResult, lines: list[str]) -> None:
        params = ", ".join(f"{k}={v}" for k, v in result.parameters.items())
        summary = result.summary

        lines.append(f"## {result.program} ({params})")
        lines.append("")
        lines.append(
            f"{summary.iterations} iterations, {summary.updates} updates, "
            f"{summary.elapsed_ms:.2f} ms ({summary.stop_reason.name})"
        )
        lines.append("")

        neighbors = result.outcome.get("top_k")
        if neighbors is None:
            lines.append(f"**Status:** {result.outcome.get('status', 'N/A')}")
            lines.append("")
            return

        if not neighbors:
            lines.append("No vertex reached.")
            lines.append("")
            return

        lines.append("| Rank | Vertex | Mean distance | Samples |")
        lines.append("|------|--------|---------------|---------|")
        for rank, neighbor in enumerate(neighbors, start=1):
            lines.append(f"| {rank} | {neighbor['vertex']} | {neighbor['mean_distance']:.4f} | {neighbor['samples']} |")
        lines.append("")
