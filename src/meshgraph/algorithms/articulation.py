"""
Articulation points: nodes whose loss splits the mesh.

Uses NetworkX's DFS discovery / low-link search over the name-keyed view
of the graph, so results are node identifiers, never internal indices.
"""

import networkx as nx

from ..errors import EmptyGraph
from ..graph.core import Graph


def articulation_points(graph: Graph) -> frozenset[str]:
    """Names of nodes whose removal increases the component count."""
    if graph.get_order() == 0:
        raise EmptyGraph("articulation point search")
    return frozenset(nx.articulation_points(graph.to_networkx()))


def is_articulation_point(graph: Graph, name: str) -> bool:
    """Check a single node by removing it and counting components."""
    G = graph.to_networkx()
    if name not in G:
        raise KeyError(f"Node {name!r} not in graph")
    before = nx.number_connected_components(G)
    G.remove_node(name)
    after = nx.number_connected_components(G) if len(G) else 0
    return after > before
