"""
Diffusion centrality.

Scores each node by the expected number of times a signal it originates
reaches other nodes within a bounded number of rounds, when every link
forwards with probability proportional to its weight:

    DC = sum_{t=1..T} (q W)^t 1
"""

from typing import Optional

import numpy as np
import networkx as nx

from ..config import DiffusionConfig
from ..errors import AnalysisFailed, EmptyGraph
from ..graph.core import Graph


def weighted_adjacency(graph: Graph) -> tuple[np.ndarray, list[str]]:
    """Symmetric weight matrix in the graph's node order."""
    nodes = graph.nodes()
    W = nx.to_numpy_array(
        graph.to_networkx(), nodelist=nodes, weight="weight", dtype=np.float64
    )
    return W, nodes


def default_passing_probability(W: np.ndarray) -> float:
    """1 / largest eigenvalue, capped at 1.0 (1.0 for an edgeless graph)."""
    if W.size == 0:
        return 1.0
    lam = float(np.max(np.abs(np.linalg.eigvalsh(W))))
    if lam <= 0:
        return 1.0
    return min(1.0 / lam, 1.0)


def diffusion_centrality(
    graph: Graph,
    config: Optional[DiffusionConfig] = None,
) -> dict[str, float]:
    """Per-node diffusion centrality over ``config.steps`` rounds."""
    config = config or DiffusionConfig()
    if graph.get_order() == 0:
        raise EmptyGraph("diffusion centrality")
    if config.steps < 1:
        raise AnalysisFailed(f"Diffusion needs at least one step, got {config.steps}")

    W, nodes = weighted_adjacency(graph)
    if np.any(W < 0):
        raise AnalysisFailed("Diffusion centrality requires non-negative weights")

    q = config.passing_probability
    if q is None:
        q = default_passing_probability(W)
    if not 0 < q <= 1:
        raise AnalysisFailed(f"Passing probability must be in (0, 1], got {q}")

    P = q * W
    reach = np.ones(len(nodes))
    scores = np.zeros(len(nodes))
    for _ in range(config.steps):
        reach = P @ reach
        scores += reach

    if not np.all(np.isfinite(scores)):
        raise AnalysisFailed("Diffusion centrality diverged")

    return {name: float(s) for name, s in zip(nodes, scores)}
