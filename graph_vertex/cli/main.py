r"""
Command-line interface for graph-vertex.

    graph-vertex reachability graph.txt -s 1 -t 3
    graph-vertex knn prob_graph.txt -s 0 -k 5 --runs 500 --seed 7
    graph-vertex generate prob_graph.txt --vertices 1000 --edges 5000
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from graph_vertex.config import get_defaults, get_env_int
from graph_vertex.datasets import EdgeListLoader, SyntheticProbabilisticGraph, write_edge_list
from graph_vertex.engine import DriverConfig
from graph_vertex.errors import GraphVertexError
from graph_vertex.graph import Graph
from graph_vertex.programs import ProgramRegistry, ReachabilityProgram, SamplingEngine
from graph_vertex.reporting import CsvExporter, JsonExporter, MarkdownExporter, ResultCollector
from graph_vertex.runner import run_program
from graph_vertex.types import ProgramResult

__all__ = ["app", "main"]

app = typer.Typer(
    name="graph-vertex",
    help="Vertex-centric reachability and probabilistic k-nearest-neighbor queries.",
    no_args_is_help=True,
)

EXPORTERS = {
    "json": (JsonExporter, ".json"),
    "csv": (CsvExporter, ".csv"),
    "markdown": (MarkdownExporter, ".md"),
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(path: Path, *, probabilistic: bool, weight: float = 1.0) -> Graph:
    try:
        return EdgeListLoader(path, probabilistic=probabilistic, weight=weight).load()
    except (GraphVertexError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _driver_config(program: str, niters: int | None, scheduler: bool, intervals: int | None, workers: int | None) -> DriverConfig:
    defaults = get_defaults(program)
    return DriverConfig(
        niters=niters if niters is not None else get_env_int("NITERS", default=defaults.niters),
        use_scheduler=scheduler,
        num_intervals=intervals if intervals is not None else get_env_int("INTERVALS", default=1),
        max_workers=workers if workers is not None else get_env_int("WORKERS"),
    )


def _run(program: ReachabilityProgram | SamplingEngine, graph: Graph, config: DriverConfig) -> ProgramResult:
    try:
        return run_program(program, graph, config=config)
    except GraphVertexError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _export(result: ProgramResult, graph_path: Path, output: Path | None, format_: str) -> None:
    if output is None:
        return

    collector = ResultCollector()
    collector.start_session(graph=str(graph_path))
    collector.add_result(result)
    collector.end_session()

    output.mkdir(parents=True, exist_ok=True)
    formats = [f.strip() for f in format_.split(",")]
    if "all" in formats:
        formats = list(EXPORTERS)

    for fmt in formats:
        if fmt not in EXPORTERS:
            typer.echo(f"Unknown format: {fmt}", err=True)
            raise typer.Exit(1)
        exporter_cls, suffix = EXPORTERS[fmt]
        path = output / f"{collector.session.session_id}_{result.program}{suffix}"
        exporter_cls().export(collector, path)
        typer.echo(f"Exported {fmt}: {path}")


@app.command()
def reachability(
    graph_path: Annotated[Path, typer.Argument(help="Edge-list file")],
    source: Annotated[int | None, typer.Option("-s", "--source", help="Query source vertex")] = None,
    dest: Annotated[int | None, typer.Option("-t", "--dest", help="Query destination vertex")] = None,
    niters: Annotated[int | None, typer.Option("-n", "--niters", help="Iteration budget")] = None,
    scheduler: Annotated[bool, typer.Option("--scheduler/--no-scheduler", help="Selective scheduling")] = True,
    intervals: Annotated[int | None, typer.Option("--intervals", help="Intervals per iteration")] = None,
    workers: Annotated[int | None, typer.Option("-w", "--workers", help="Worker threads")] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="Output directory")] = None,
    format_: Annotated[str, typer.Option("-f", "--format", help="Output format: json, csv, markdown, all")] = "json",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Check whether a directed path leads from source to dest."""
    _configure_logging(verbose)
    graph = _load(graph_path, probabilistic=False)
    if verbose:
        typer.echo(f"Loaded {graph}")

    program = ReachabilityProgram(source=source, dest=dest)
    result = _run(program, graph, _driver_config("reachability", niters, scheduler, intervals, workers))

    typer.echo(program.status.value)
    if verbose:
        typer.echo(f"Iterations: {result.summary.iterations} ({result.summary.elapsed_ms:.2f} ms)")
    _export(result, graph_path, output, format_)


@app.command()
def knn(
    graph_path: Annotated[Path, typer.Argument(help="Edge-list file with edge probabilities")],
    source: Annotated[int | None, typer.Option("-s", "--source", help="Source vertex")] = None,
    k: Annotated[int | None, typer.Option("-k", help="Number of nearest vertices to report")] = None,
    runs: Annotated[int | None, typer.Option("-r", "--runs", help="Number of sampling runs")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
    weight: Annotated[float, typer.Option("--weight", help="Fixed edge weight")] = 1.0,
    niters: Annotated[int | None, typer.Option("-n", "--niters", help="Iteration budget")] = None,
    intervals: Annotated[int | None, typer.Option("--intervals", help="Intervals per iteration")] = None,
    workers: Annotated[int | None, typer.Option("-w", "--workers", help="Worker threads")] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="Output directory")] = None,
    format_: Annotated[str, typer.Option("-f", "--format", help="Output format: json, csv, markdown, all")] = "json",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Estimate the k nearest vertices to a source on a probabilistic graph."""
    _configure_logging(verbose)
    defaults = get_defaults("knn")
    graph = _load(graph_path, probabilistic=True, weight=weight)
    if verbose:
        typer.echo(f"Loaded {graph}")

    try:
        program = SamplingEngine(
            source=source,
            k=k if k is not None else defaults.k,
            max_runs=runs if runs is not None else defaults.max_runs,
            seed=seed if seed is not None else get_env_int("SEED"),
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    result = _run(program, graph, _driver_config("knn", niters, True, intervals, workers))

    if result.outcome["runs_completed"] < result.outcome["runs_launched"]:
        typer.echo("Warning: iteration budget ran out before every sampling run finished", err=True)

    for rank, (vertex_id, mean) in enumerate(program.top_k(), start=1):
        typer.echo(f"{rank}\t{vertex_id}\t{mean:.4f}")
    if verbose:
        typer.echo(f"Runs: {program.runs_completed}, iterations: {result.summary.iterations}")
    _export(result, graph_path, output, format_)


@app.command()
def generate(
    output: Annotated[Path, typer.Argument(help="Edge-list file to write")],
    vertices: Annotated[int, typer.Option("--vertices", help="Number of vertices")] = 1000,
    edges: Annotated[int, typer.Option("--edges", help="Number of edges")] = 5000,
    p_min: Annotated[float, typer.Option("--p-min", help="Lowest edge probability")] = 0.0,
    p_max: Annotated[float, typer.Option("--p-max", help="Highest edge probability")] = 1.0,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """Generate a random probabilistic graph as an edge list."""
    try:
        graph = SyntheticProbabilisticGraph(
            num_vertices=vertices,
            num_edges=edges,
            p_min=p_min,
            p_max=p_max,
            seed=seed,
        ).load()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    write_edge_list(graph, output)
    typer.echo(f"Generated {graph}: {output}")


@app.command()
def programs() -> None:
    """List registered programs."""
    typer.echo("Available programs:")
    for name in ProgramRegistry.list():
        typer.echo(f"  - {name}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
