"""
Predicted topology.

Extrapolates the next mesh graph from a sequence of past snapshots.
The extrapolation model is swappable through the Predictor interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ..config import PredictionConfig
from ..errors import AnalysisFailed
from ..graph.core import Graph
from ..graph.temporal import edge_map


class Predictor(ABC):
    """Produces one Graph from an ordered (oldest first) graph history."""

    @abstractmethod
    def predict(self, history: Sequence[Graph]) -> Graph:
        ...


class TrendPredictor(Predictor):
    """
    Presence vote plus linear weight trend.

    Over the last ``window`` snapshots a node or link survives when it is
    present in at least ``presence_threshold`` of them. A surviving link's
    weight is a least-squares line through the snapshots that contain it,
    evaluated ``horizon`` steps past the newest snapshot and clipped at 0.
    """

    def __init__(self, config: Optional[PredictionConfig] = None):
        self.config = config or PredictionConfig()

    def predict(self, history: Sequence[Graph]) -> Graph:
        if not history:
            raise AnalysisFailed("Topology prediction needs at least one snapshot")

        window = list(history)[-max(self.config.window, 1):]
        T = len(window)
        threshold = self.config.presence_threshold

        node_seen: dict[str, int] = {}
        for g in window:
            for name in g.nodes():
                node_seen[name] = node_seen.get(name, 0) + 1

        series: dict[frozenset, list[tuple[int, float]]] = {}
        for t, g in enumerate(window):
            for pair, w in edge_map(g).items():
                series.setdefault(pair, []).append((t, w))

        kept_edges = {}
        for pair, points in series.items():
            if len(points) / T >= threshold:
                kept_edges[pair] = max(self._extrapolate(points, T), 0.0)

        kept_nodes = {n for n, c in node_seen.items() if c / T >= threshold}
        for pair in kept_edges:
            kept_nodes.update(pair)

        predicted = Graph()
        for name in sorted(kept_nodes, key=_name_key):
            predicted.add_node(name)
        for pair in sorted(kept_edges, key=lambda p: sorted(p, key=_name_key)):
            a, b = sorted(pair, key=_name_key)
            predicted.add_edge(a, b, kept_edges[pair])
        return predicted

    def _extrapolate(self, points: list[tuple[int, float]], T: int) -> float:
        target = T - 1 + self.config.horizon
        if len(points) == 1:
            return points[0][1]
        t = np.array([p[0] for p in points], dtype=np.float64)
        w = np.array([p[1] for p in points], dtype=np.float64)
        slope, intercept = np.polyfit(t, w, 1)
        return float(slope * target + intercept)


def _name_key(name: str):
    # Numeric node ids sort numerically, anything else after them
    return (0, int(name), "") if name.isdigit() else (1, 0, name)


def predict_state(
    history: Sequence[Graph],
    predictor: Optional[Predictor] = None,
) -> Graph:
    """Convenience: predict with the default trend model."""
    return (predictor or TrendPredictor()).predict(history)
