"""
Global minimum edge cut.

The weighted minimum cut (Stoer-Wagner) is the cheapest set of links
whose loss fragments the mesh; its value measures fragmentation
resistance. A graph that is already fragmented has a zero cut.
"""

from dataclasses import dataclass, field

import networkx as nx

from ..errors import AnalysisFailed, Disconnected, EmptyGraph
from ..graph.core import Graph
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MinCut:
    """Cut value, the two sides and the links crossing between them."""
    value: float
    partition: tuple[frozenset, frozenset]
    edges: frozenset = field(default_factory=frozenset)  # {(a, b, weight)}

    @property
    def size(self) -> int:
        return len(self.edges)


def min_cut(graph: Graph, strict: bool = False) -> MinCut:
    """
    Minimum-weight cut of ``graph``.

    A disconnected graph yields a zero cut between its first component and
    the rest, or raises Disconnected when ``strict`` is set.
    """
    if graph.get_order() == 0:
        raise EmptyGraph("minimum cut")
    if graph.get_order() < 2:
        raise AnalysisFailed("Minimum cut needs at least two nodes")

    G = graph.to_networkx()
    components = sorted(
        (sorted(c) for c in nx.connected_components(G)), key=lambda c: c[0]
    )
    if len(components) > 1:
        if strict:
            raise Disconnected("minimum cut", len(components))
        side = frozenset(components[0])
        return MinCut(
            value=0.0,
            partition=(side, frozenset(G.nodes()) - side),
        )

    negative = [(a, b) for a, b, w in G.edges(data="weight") if w < 0]
    if negative:
        raise AnalysisFailed(f"Minimum cut requires non-negative weights: {negative[:3]}")

    try:
        value, (left, right) = nx.stoer_wagner(G, weight="weight")
    except nx.NetworkXError as e:
        raise AnalysisFailed(f"Minimum cut failed: {e}") from e

    left, right = frozenset(left), frozenset(right)
    crossing = frozenset(
        (a, b, w) if a < b else (b, a, w)
        for a, b, w in G.edges(data="weight")
        if (a in left) != (b in left)
    )
    logger.debug("Minimum cut %.4f across %d links", value, len(crossing))
    return MinCut(value=float(value), partition=(left, right), edges=crossing)
