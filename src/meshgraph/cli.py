"""
MeshGraph CLI: Command-line interface for mesh topology analytics.

Commands:
  build      Reconcile a telemetry snapshot into a graph
  analyze    Build a graph and run every structural analysis
  demo       Run the engine over a synthetic evolving mesh
"""

import json

import click
import numpy as np

from .config import (
    DiffusionConfig,
    EdgeWeightConfig,
    EngineConfig,
    LAT_CONVERSION_FACTOR,
    LON_CONVERSION_FACTOR,
)
from .errors import MissingLocation
from .logging import enable_debug_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="meshgraph")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """MeshGraph: Mesh Network Topology Analytics."""
    if verbose:
        enable_debug_logging()


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Output file (node-link JSON graph)")
@click.option("--distance-weight", default=0.5, help="Distance coefficient of edge weights")
@click.option("--quality-weight", default=0.5, help="Signal quality coefficient of edge weights")
def build(file, output, distance_weight, quality_weight):
    """Build a graph from a telemetry JSON file."""
    from .graph.builder import GraphBuilder
    from .graph.weights import NormalizedBlend
    from .ingest.telemetry import load_telemetry

    click.echo(f"Loading telemetry from {file}...")
    observations, nodes = load_telemetry(file)
    click.echo(f"  Observations: {len(observations)}, Known nodes: {len(nodes)}")

    builder = GraphBuilder(
        weight_fn=NormalizedBlend(EdgeWeightConfig(distance_weight, quality_weight))
    )
    try:
        graph = builder.build(observations, nodes)
    except MissingLocation as e:
        raise click.ClickException(e.reason)

    click.echo(f"  Nodes: {graph.get_order()}")
    click.echo(f"  Edges: {graph.get_size()}")

    if output:
        with open(output, "w") as f:
            json.dump(graph.to_node_link(), f, indent=2, default=str)
        click.echo(f"  Saved to {output}")

    click.echo("Done.")


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--history", "-H", multiple=True, type=click.Path(exists=True),
              help="Earlier telemetry snapshots, oldest first (repeatable)")
@click.option("--steps", default=3, help="Diffusion rounds")
@click.option("--strict-mincut", is_flag=True, help="Fail minimum cut on disconnected graphs")
@click.option("--output", "-o", default=None, help="Save report to JSON")
def analyze(file, history, steps, strict_mincut, output):
    """Run all structural analyses on a telemetry snapshot."""
    from .engine import AnalysisEngine
    from .ingest.telemetry import load_telemetry

    config = EngineConfig(
        strict_mincut=strict_mincut,
        diffusion=DiffusionConfig(steps=steps),
    )
    engine = AnalysisEngine(config)

    for t, path in enumerate([*history, file]):
        observations, nodes = load_telemetry(path)
        try:
            engine.ingest(observations, nodes, timestamp=float(t), label=path)
        except MissingLocation as e:
            raise click.ClickException(f"{path}: {e.reason}")

    graph = engine.current_graph
    click.echo(f"\n--- Mesh Analysis Report ---")
    click.echo(f"Nodes: {graph.get_order()}, Edges: {graph.get_size()}")

    report = _render_store(engine.store)
    if history:
        report["evolution"] = {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in engine.history.evolution_stats().items()
        }
    for name, value in report.items():
        click.echo(f"{name}: {value}")

    if output:
        with open(output, "w") as f:
            json.dump(report, f, indent=2, default=str)
        click.echo(f"\nReport saved to {output}")


@cli.command()
@click.option("--nodes", "-n", default=8, help="Number of mesh nodes")
@click.option("--cycles", "-c", default=4, help="Ingestion cycles")
@click.option("--seed", default=7, help="Random seed")
def demo(nodes, cycles, seed):
    """Run a demo with a synthetic, slowly changing mesh."""
    from .engine import AnalysisEngine

    click.echo("=" * 60)
    click.echo("  MeshGraph Demo: Mesh Topology Analytics")
    click.echo("=" * 60)

    engine = AnalysisEngine()
    rng = np.random.default_rng(seed)
    positions = _demo_positions(nodes, rng)

    for cycle in range(cycles):
        observations = _demo_observations(positions, rng, timestamp=cycle * 60)
        state = engine.ingest(observations, positions, timestamp=float(cycle * 60))
        click.echo(
            f"\n[{cycle + 1}/{cycles}] {state.graph.get_order()} nodes, "
            f"{state.graph.get_size()} links"
        )

    click.echo("\nLatest analyses:")
    for name, value in _render_store(engine.store).items():
        click.echo(f"  {name}: {value}")

    stats = engine.history.evolution_stats()
    click.echo(f"\nStability ratio: {stats.get('stability_ratio', 1.0):.2f}")
    click.echo("=" * 60)


def _render_store(store) -> dict:
    """Slot name -> printable value."""
    from .algorithms.mincut import MinCut
    from .graph.core import Graph

    rendered = {}
    for name, result in store.snapshot().items():
        value = result.render()
        if isinstance(value, Graph):
            value = {
                "nodes": value.nodes(),
                "edges": [[a, b, round(w, 4)] for a, b, w in value.edges()],
            }
        elif isinstance(value, frozenset):
            value = sorted(value)
        elif isinstance(value, dict):
            value = {k: round(v, 4) for k, v in sorted(value.items())}
        elif isinstance(value, MinCut):
            value = {
                "value": round(value.value, 4),
                "size": value.size,
                "edges": sorted([a, b] for a, b, _ in value.edges),
            }
        rendered[name] = value
    return rendered


def _demo_positions(count: int, rng: np.random.Generator) -> dict:
    from .ingest.telemetry import MeshNode, Position

    # Nodes scattered within ~2 km of Hanover, NH
    lat = 43.7022 + rng.uniform(-0.01, 0.01, size=count)
    lon = -72.2896 + rng.uniform(-0.01, 0.01, size=count)
    alt = rng.integers(100, 200, size=count)
    return {
        i + 1: MeshNode(
            num=i + 1,
            position=Position(
                latitude_i=int(lat[i] / LAT_CONVERSION_FACTOR),
                longitude_i=int(lon[i] / LON_CONVERSION_FACTOR),
                altitude=int(alt[i]),
            ),
        )
        for i in range(count)
    }


def _demo_observations(positions: dict, rng: np.random.Generator, timestamp: int) -> dict:
    ids = sorted(positions)
    observations = {}
    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            if rng.random() < 0.45:
                observations[(a, b)] = (float(rng.uniform(0.05, 1.0)), timestamp)
            if rng.random() < 0.3:
                observations[(b, a)] = (float(rng.uniform(0.05, 1.0)), timestamp + 1)
    return observations


if __name__ == "__main__":
    cli()
