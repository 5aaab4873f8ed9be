r"""
Tests for graph_vertex.reporting module.
"""

import json

import pytest

from graph_vertex.engine import DriverConfig
from graph_vertex.programs import ReachabilityProgram, SamplingEngine
from graph_vertex.reporting import CsvExporter, JsonExporter, MarkdownExporter, ResultCollector
from graph_vertex.runner import run_program


@pytest.fixture
def collector(chain_graph, certain_graph) -> ResultCollector:
    collector = ResultCollector()
    collector.start_session(graph="test.txt")
    collector.add_result(run_program(ReachabilityProgram(source=1, dest=3), chain_graph))
    collector.add_result(
        run_program(SamplingEngine(source=0, k=2, max_runs=2), certain_graph, config=DriverConfig(niters=50))
    )
    collector.end_session()
    return collector


class TestResultCollector:
    def test_session(self, collector):
        assert collector.session.session_id.startswith("run_")
        assert collector.session.graph == "test.txt"
        assert collector.session.completed_at

    def test_environment(self, collector):
        assert collector.environment.cpu_count > 0
        assert collector.environment.python_version.startswith("3.")

    def test_results_by_program(self, collector):
        assert len(collector.results) == 2
        assert len(collector.get_results_by_program("knn")) == 1
        assert collector.get_results_by_program("pagerank") == []

    def test_to_dict(self, collector):
        data = collector.to_dict()
        reach = data["results"][0]
        assert reach["program"] == "reachability"
        assert reach["run"]["stop_reason"] == "PROGRAM_FINISHED"
        assert reach["outcome"]["status"] == "Connected"


class TestJsonExporter:
    def test_valid_json(self, collector):
        data = json.loads(JsonExporter().to_string(collector))
        assert data["session"]["graph"] == "test.txt"
        assert data["results"][1]["outcome"]["top_k"][0]["vertex"] == 1

    def test_export_file(self, collector, tmp_path):
        path = tmp_path / "results.json"
        JsonExporter().export(collector, path)
        assert json.loads(path.read_text())["results"]


class TestCsvExporter:
    def test_rows(self, collector):
        lines = CsvExporter().to_string(collector).splitlines()

        assert lines[0] == CsvExporter.HEADER
        # one reachability row, one row per ranked neighbor
        assert len(lines) == 4
        assert lines[1].split(",")[5] == "Connected"
        assert lines[2].split(",")[6:] == ["1", "1", "1.000000", "2"]
        assert lines[3].split(",")[6:] == ["2", "2", "1.000000", "2"]


class TestMarkdownExporter:
    def test_report(self, collector):
        report = MarkdownExporter().to_string(collector)

        assert report.startswith("# Graph Program Report")
        assert "**Status:** Connected" in report
        assert "| 1 | 1 | 1.0000 | 2 |" in report

    def test_no_vertex_reached(self, certain_graph):
        collector = ResultCollector()
        collector.start_session(graph="test.txt")
        collector.add_result(run_program(SamplingEngine(source=4, max_runs=1), certain_graph))
        assert "No vertex reached." in MarkdownExporter().to_string(collector)
