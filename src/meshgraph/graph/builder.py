"""
Graph builder.

Reconciles one telemetry snapshot (directed, timestamped SNR observations
plus node positions) into a single undirected weighted Graph.

Only nodes that appear in at least one observation become graph nodes;
position records of unobserved nodes are ignored. The build is
all-or-nothing: a missing position fails the whole snapshot.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np

from ..errors import MissingLocation
from ..logging import get_logger
from .core import Edge, Graph
from .geo import position_distance
from .weights import WeightFunction, default_weight_function

logger = get_logger(__name__)


@dataclass(frozen=True)
class Observation:
    """A single directed link report."""
    source: int
    neighbor: int
    quality: float
    timestamp: int


def resolve_position(record):
    """Accept either a node record carrying ``.position`` or a bare position."""
    if record is None:
        return None
    if hasattr(record, "latitude_i"):
        return record
    return getattr(record, "position", None)


class GraphBuilder:
    """
    Build a Graph from one telemetry snapshot.

    Per unordered pair the later-timestamped observation wins. When both
    directions carry the same timestamp, ``prefer_smaller`` keeps the one
    whose computed weight is smaller (larger when False).
    """

    def __init__(
        self,
        weight_fn: Optional[WeightFunction] = None,
        prefer_smaller: bool = True,
    ):
        self.weight_fn = weight_fn or default_weight_function()
        self.prefer_smaller = prefer_smaller

    def build(
        self,
        observations: Mapping[tuple[int, int], tuple[float, int]],
        positions: Mapping[int, object],
    ) -> Graph:
        obs = [
            Observation(int(src), int(dst), float(q), int(ts))
            for (src, dst), (q, ts) in observations.items()
        ]
        # Sorted so index assignment never depends on mapping order
        obs.sort(key=lambda o: (o.source, o.neighbor))

        # Self-reports still make their node part of the snapshot
        node_ids = sorted({o.source for o in obs} | {o.neighbor for o in obs})
        obs = [o for o in obs if o.source != o.neighbor]
        located = {}
        for node_id in node_ids:
            pos = resolve_position(positions.get(node_id))
            if pos is None:
                raise MissingLocation(node_id)
            located[node_id] = pos

        distances = {}
        for o in obs:
            pair = _pair(o.source, o.neighbor)
            if pair not in distances:
                distances[pair] = position_distance(located[pair[0]], located[pair[1]])

        winners: dict[tuple[int, int], Observation] = {}
        for o in obs:
            pair = _pair(o.source, o.neighbor)
            current = winners.get(pair)
            winners[pair] = o if current is None else self._resolve(
                current, o, distances[pair]
            )

        graph = Graph()
        for node_id in node_ids:
            graph.add_node(str(node_id))

        pairs = sorted(winners)
        weights = self.weight_fn(
            np.array([distances[p] for p in pairs], dtype=np.float64),
            np.array([winners[p].quality for p in pairs], dtype=np.float64),
        )
        for pair, weight in zip(pairs, weights):
            win = winners[pair]
            graph.add_edge_from_struct(Edge(
                u=graph.get_node_idx(str(pair[0])),
                v=graph.get_node_idx(str(pair[1])),
                weight=float(weight),
                quality=win.quality,
                distance=distances[pair],
                timestamp=win.timestamp,
                origin=(str(win.source), str(win.neighbor)),
            ))

        logger.debug(
            "Built graph from %d observations: %d nodes, %d edges",
            len(obs), graph.get_order(), graph.get_size(),
        )
        return graph

    def _resolve(self, a: Observation, b: Observation, distance: float) -> Observation:
        """Pick the observation that determines a pair's weight."""
        if a.timestamp != b.timestamp:
            return a if a.timestamp > b.timestamp else b
        if a.quality == b.quality:
            return a if (a.source, a.neighbor) < (b.source, b.neighbor) else b
        wa, wb = self.weight_fn(
            np.array([distance, distance]), np.array([a.quality, b.quality])
        )
        if wa == wb:
            return a if (a.source, a.neighbor) < (b.source, b.neighbor) else b
        if self.prefer_smaller:
            return a if wa < wb else b
        return a if wa > wb else b


def _pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


def build_graph(
    observations: Mapping[tuple[int, int], tuple[float, int]],
    positions: Mapping[int, object],
    weight_fn: Optional[WeightFunction] = None,
    prefer_smaller: bool = True,
) -> Graph:
    """Convenience: build a graph with default settings."""
    return GraphBuilder(weight_fn, prefer_smaller).build(observations, positions)
