r"""
Result collection and reporting.

Collects program results and exports them to
JSON, CSV, and Markdown formats.

    from graph_vertex.reporting import ResultCollector, MarkdownExporter

    collector = ResultCollector()
    collector.add_result(result)
    MarkdownExporter().export(collector, "report.md")
"""

from graph_vertex.reporting.collector import EnvironmentInfo, ResultCollector, SessionInfo
from graph_vertex.reporting.formats import BaseExporter, CsvExporter, JsonExporter, MarkdownExporter

__all__ = [
    "BaseExporter",
    "CsvExporter",
    "EnvironmentInfo",
    "JsonExporter",
    "MarkdownExporter",
    "ResultCollector",
    "SessionInfo",
]
