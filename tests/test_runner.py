r"""
Tests for graph_vertex.runner and graph_vertex.engine.timing modules.
"""

import logging

import pytest

from graph_vertex.engine import DriverConfig, Stopwatch
from graph_vertex.errors import InvalidQueryError
from graph_vertex.programs import ReachabilityProgram
from graph_vertex.runner import run_program
from graph_vertex.types import ProgramResult, StopReason


class TestStopwatch:
    def test_context_manager(self):
        with Stopwatch() as watch:
            sum(range(1000))

        assert watch.elapsed_ns > 0
        assert watch.elapsed_ms == watch.elapsed_ns / 1_000_000

    def test_elapsed_frozen_after_exit(self):
        with Stopwatch() as watch:
            pass

        assert watch.elapsed_ns == watch.elapsed_ns

    def test_laps(self):
        with Stopwatch() as watch:
            first = watch.lap()
            second = watch.lap()

        assert watch.laps == (first, second)
        assert sum(watch.laps) <= watch.elapsed_ns

    def test_run_records_one_lap_per_iteration(self, chain_graph):
        result = run_program(ReachabilityProgram(source=1, dest=4), chain_graph)
        assert len(result.summary.iteration_ns) == result.summary.iterations


class TestRunProgram:
    def test_returns_result(self, chain_graph):
        result = run_program(ReachabilityProgram(source=1, dest=3), chain_graph)

        assert isinstance(result, ProgramResult)
        assert result.summary.stop_reason == StopReason.PROGRAM_FINISHED
        assert result.summary.updates > 0
        assert result.summary.elapsed_ns > 0

    def test_uses_config(self, chain_graph):
        config = DriverConfig(niters=1)
        result = run_program(ReachabilityProgram(source=1, dest=3), chain_graph, config=config)

        assert result.summary.iterations == 1
        assert result.summary.stop_reason == StopReason.ITERATION_CAP
        assert result.outcome["decided"] is False

    def test_invalid_query_propagates(self, chain_graph):
        with pytest.raises(InvalidQueryError):
            run_program(ReachabilityProgram(source=1, dest=10), chain_graph)

    def test_logs_decision(self, chain_graph, caplog):
        with caplog.at_level(logging.INFO, logger="graph_vertex"):
            run_program(ReachabilityProgram(source=1, dest=3), chain_graph)

        assert "Connected" in caplog.messages
