"""
Snapshot history.

Keeps the ordered sequence of graphs built by past ingestion cycles.
Feeds topology prediction and historical similarity search, and reports
how the mesh evolved between cycles.
"""

import time
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .core import Graph


@dataclass
class GraphSnapshot:
    """A single timestamped graph snapshot."""
    graph: Graph
    timestamp: float
    label: str = ""
    metadata: dict = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        return self.graph.get_order()

    @property
    def edge_count(self) -> int:
        return self.graph.get_size()


@dataclass
class GraphDelta:
    """Changes between two snapshots."""
    t_from: float
    t_to: float
    added_nodes: set
    removed_nodes: set
    added_edges: set
    removed_edges: set
    reweighted_edges: list  # (a, b, old_weight, new_weight)

    @property
    def is_stable(self) -> bool:
        return not (
            self.added_nodes or self.removed_nodes
            or self.added_edges or self.removed_edges
        )

    @property
    def change_magnitude(self) -> float:
        """Scalar measure of how much the topology changed."""
        return (
            len(self.added_nodes)
            + len(self.removed_nodes)
            + len(self.added_edges) * 2
            + len(self.removed_edges) * 2
            + len(self.reweighted_edges)
        )


def edge_map(graph: Graph) -> dict[frozenset, float]:
    """Unordered name pair -> weight."""
    return {frozenset((a, b)): w for a, b, w in graph.edges()}


class SnapshotHistory:
    """
    Bounded, ordered list of graph snapshots (oldest first).

    Snapshots share the Graph objects they are given; graphs are treated
    as immutable once built.
    """

    def __init__(self, max_snapshots: int = 100):
        self.snapshots: list[GraphSnapshot] = []
        self.max_snapshots = max_snapshots

    def add_snapshot(
        self,
        graph: Graph,
        timestamp: Optional[float] = None,
        label: str = "",
        metadata: Optional[dict] = None,
    ) -> GraphSnapshot:
        ts = time.time() if timestamp is None else timestamp
        snap = GraphSnapshot(
            graph=graph,
            timestamp=ts,
            label=label,
            metadata=metadata or {},
        )
        self.snapshots.append(snap)

        if len(self.snapshots) > self.max_snapshots:
            self.snapshots = self.snapshots[-self.max_snapshots:]

        return snap

    def graphs(self) -> list[Graph]:
        return [s.graph for s in self.snapshots]

    def __len__(self) -> int:
        return len(self.snapshots)

    def diff(self, snap_a: GraphSnapshot, snap_b: GraphSnapshot) -> GraphDelta:
        """Compute the difference between two snapshots."""
        nodes_a = set(snap_a.graph.nodes())
        nodes_b = set(snap_b.graph.nodes())
        edges_a = edge_map(snap_a.graph)
        edges_b = edge_map(snap_b.graph)

        reweighted = []
        for pair in sorted(edges_a.keys() & edges_b.keys(), key=sorted):
            if edges_a[pair] != edges_b[pair]:
                a, b = sorted(pair)
                reweighted.append((a, b, edges_a[pair], edges_b[pair]))

        return GraphDelta(
            t_from=snap_a.timestamp,
            t_to=snap_b.timestamp,
            added_nodes=nodes_b - nodes_a,
            removed_nodes=nodes_a - nodes_b,
            added_edges={tuple(sorted(p)) for p in edges_b.keys() - edges_a.keys()},
            removed_edges={tuple(sorted(p)) for p in edges_a.keys() - edges_b.keys()},
            reweighted_edges=reweighted,
        )

    def get_deltas(self) -> list[GraphDelta]:
        """Deltas between consecutive snapshots, oldest first."""
        return [self.diff(a, b) for a, b in zip(self.snapshots, self.snapshots[1:])]

    def evolution_stats(self) -> dict:
        """Summary of how the mesh changed across the retained snapshots."""
        stats = {"snapshots": len(self.snapshots)}
        deltas = self.get_deltas()
        if not deltas:
            return stats

        stats.update(
            time_span=self.snapshots[-1].timestamp - self.snapshots[0].timestamp,
            mean_nodes=float(np.mean([s.node_count for s in self.snapshots])),
            mean_links=float(np.mean([s.edge_count for s in self.snapshots])),
            stability_ratio=sum(d.is_stable for d in deltas) / len(deltas),
            mean_change=float(np.mean([d.change_magnitude for d in deltas])),
            nodes_joined=sum(len(d.added_nodes) for d in deltas),
            nodes_left=sum(len(d.removed_nodes) for d in deltas),
            links_added=sum(len(d.added_edges) for d in deltas),
            links_removed=sum(len(d.removed_edges) for d in deltas),
            links_reweighted=sum(len(d.reweighted_edges) for d in deltas),
        )
        return stats
