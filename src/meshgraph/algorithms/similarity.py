"""
Most-similar historical topology.

Ranks past snapshots by structural similarity to the current graph.
The metric is swappable through the SimilarityMetric interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..errors import AnalysisFailed
from ..graph.core import Graph
from ..graph.temporal import edge_map


class SimilarityMetric(ABC):
    """Similarity score in [0, 1]; 1 means structurally identical."""

    @abstractmethod
    def score(self, a: Graph, b: Graph) -> float:
        ...


class WeightedJaccard(SimilarityMetric):
    """Blend of node-set Jaccard and weighted Jaccard over links."""

    def __init__(self, node_share: float = 0.5):
        if not 0.0 <= node_share <= 1.0:
            raise ValueError(f"node_share must be in [0, 1], got {node_share}")
        self.node_share = node_share

    def score(self, a: Graph, b: Graph) -> float:
        nodes_a, nodes_b = set(a.nodes()), set(b.nodes())
        union = nodes_a | nodes_b
        node_sim = len(nodes_a & nodes_b) / len(union) if union else 1.0

        edges_a, edges_b = edge_map(a), edge_map(b)
        low = high = 0.0
        for pair in edges_a.keys() | edges_b.keys():
            wa = abs(edges_a.get(pair, 0.0))
            wb = abs(edges_b.get(pair, 0.0))
            low += min(wa, wb)
            high += max(wa, wb)
        if high > 0:
            edge_sim = low / high
        else:
            # Weightless links: fall back to plain link-set Jaccard
            pairs = edges_a.keys() | edges_b.keys()
            edge_sim = len(edges_a.keys() & edges_b.keys()) / len(pairs) if pairs else 1.0

        return self.node_share * node_sim + (1 - self.node_share) * edge_sim


def rank_history(
    current: Graph,
    history: Sequence[Graph],
    metric: Optional[SimilarityMetric] = None,
) -> list[tuple[int, float]]:
    """(history index, score) pairs, best first; ties favor newer snapshots."""
    metric = metric or WeightedJaccard()
    scored = [(i, metric.score(current, g)) for i, g in enumerate(history)]
    return sorted(scored, key=lambda x: (x[1], x[0]), reverse=True)


def most_similar(
    current: Graph,
    history: Sequence[Graph],
    metric: Optional[SimilarityMetric] = None,
) -> Graph:
    """The historical graph closest to ``current``."""
    if not history:
        raise AnalysisFailed("No historical snapshots to compare against")
    best, _ = rank_history(current, history, metric)[0]
    return history[best]
