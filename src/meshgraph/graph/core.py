"""
Weighted undirected mesh graph.

Nodes are addressed by stable string names. Each name maps to a dense
integer index that keys the underlying NetworkX graph; the index table
is private to the Graph and never leaves it.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

import networkx as nx


@dataclass(frozen=True)
class Edge:
    """One resolved undirected link between two node indices."""
    u: int
    v: int
    weight: float
    quality: float = 0.0
    distance: float = 0.0
    timestamp: int = 0
    origin: Optional[tuple[str, str]] = None  # (source, neighbor) that won


class Graph:
    """
    Undirected weighted graph with name-based addressing.

    At most one edge per unordered pair and no self-loops. The Graph does
    not reconcile conflicting submissions; the builder resolves them
    before edges reach it.
    """

    def __init__(self):
        self._g = nx.Graph()
        self._name_to_idx: dict[str, int] = {}
        self._idx_to_name: list[str] = []

    # -- nodes ---------------------------------------------------------

    def contains_node(self, name: str) -> bool:
        return name in self._name_to_idx

    def add_node(self, name: str) -> None:
        """Insert a node; inserting an existing name is a no-op."""
        if name in self._name_to_idx:
            return
        idx = len(self._idx_to_name)
        self._name_to_idx[name] = idx
        self._idx_to_name.append(name)
        self._g.add_node(idx)

    def get_node_idx(self, name: str) -> int:
        """Internal index of a node. Raises KeyError for unknown names."""
        try:
            return self._name_to_idx[name]
        except KeyError:
            raise KeyError(f"Node {name!r} not in graph") from None

    def nodes(self) -> list[str]:
        """Node names in insertion order."""
        return list(self._idx_to_name)

    def neighbors(self, name: str) -> list[str]:
        idx = self.get_node_idx(name)
        return [self._idx_to_name[j] for j in self._g.neighbors(idx)]

    def degree(self, name: str) -> int:
        return self._g.degree(self.get_node_idx(name))

    # -- edges ---------------------------------------------------------

    def add_edge_from_struct(self, edge: Edge) -> None:
        """Insert one undirected edge between two existing nodes."""
        for idx in (edge.u, edge.v):
            if not 0 <= idx < len(self._idx_to_name):
                raise KeyError(f"Edge endpoint index {idx} not in graph")
        if edge.u == edge.v:
            raise ValueError(
                f"Self-loop on node {self._idx_to_name[edge.u]!r} rejected"
            )
        if self._g.has_edge(edge.u, edge.v):
            raise ValueError(
                f"Edge {self._idx_to_name[edge.u]!r} <-> "
                f"{self._idx_to_name[edge.v]!r} already present"
            )
        self._g.add_edge(
            edge.u,
            edge.v,
            weight=float(edge.weight),
            quality=edge.quality,
            distance=edge.distance,
            timestamp=edge.timestamp,
            origin=edge.origin,
        )

    def add_edge(self, a: str, b: str, weight: float, **attrs) -> None:
        """Name-based convenience around add_edge_from_struct."""
        self.add_edge_from_struct(
            Edge(self.get_node_idx(a), self.get_node_idx(b), weight, **attrs)
        )

    def has_edge(self, a: str, b: str) -> bool:
        if a not in self._name_to_idx or b not in self._name_to_idx:
            return False
        return self._g.has_edge(self._name_to_idx[a], self._name_to_idx[b])

    def get_edge_weight(
        self,
        a: str,
        b: str,
        direction: Optional[bool] = None,
        prefer_smaller: Optional[bool] = None,
    ) -> float:
        """
        Stored weight of the a-b link.

        The graph keeps a single resolved scalar per unordered pair, so
        ``direction`` and ``prefer_smaller`` do not change the value; use
        get_edge_origin() to see which directed observation produced it.
        Raises KeyError when the link does not exist.
        """
        u, v = self.get_node_idx(a), self.get_node_idx(b)
        if not self._g.has_edge(u, v):
            raise KeyError(f"No edge {a!r} <-> {b!r}")
        return self._g.edges[u, v]["weight"]

    def get_edge_origin(self, a: str, b: str) -> Optional[tuple[str, str]]:
        """The (source, neighbor) observation that determined the a-b weight."""
        u, v = self.get_node_idx(a), self.get_node_idx(b)
        if not self._g.has_edge(u, v):
            raise KeyError(f"No edge {a!r} <-> {b!r}")
        return self._g.edges[u, v].get("origin")

    def edges(self) -> Iterator[tuple[str, str, float]]:
        """Yield (name_a, name_b, weight) for every link."""
        for u, v, w in self._g.edges(data="weight"):
            yield self._idx_to_name[u], self._idx_to_name[v], w

    def get_order(self) -> int:
        return self._g.number_of_nodes()

    def get_size(self) -> int:
        return self._g.number_of_edges()

    # -- conversion ----------------------------------------------------

    def to_networkx(self) -> nx.Graph:
        """Name-keyed NetworkX copy, safe for read-only algorithms."""
        G = nx.Graph()
        G.add_nodes_from(self._idx_to_name)
        for u, v, data in self._g.edges(data=True):
            G.add_edge(self._idx_to_name[u], self._idx_to_name[v], **data)
        return G

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "Graph":
        """Build from a name-keyed NetworkX graph (weights default to 1.0)."""
        graph = cls()
        for node in sorted(G.nodes(), key=str):
            graph.add_node(str(node))
        for a, b, data in G.edges(data=True):
            if a == b:
                continue
            graph.add_edge(
                str(a),
                str(b),
                data.get("weight", 1.0),
                quality=data.get("quality", 0.0),
                distance=data.get("distance", 0.0),
                timestamp=data.get("timestamp", 0),
                origin=data.get("origin"),
            )
        return graph

    def to_node_link(self) -> dict:
        """Node-link JSON structure for export."""
        G = self.to_networkx()
        for _, _, data in G.edges(data=True):
            if data.get("origin") is not None:
                data["origin"] = list(data["origin"])
        return nx.node_link_data(G, edges="links")

    @classmethod
    def from_node_link(cls, data: dict) -> "Graph":
        G = nx.node_link_graph(data, edges="links")
        for _, _, attrs in G.edges(data=True):
            if attrs.get("origin") is not None:
                attrs["origin"] = tuple(attrs["origin"])
        return cls.from_networkx(G)

    def copy(self) -> "Graph":
        clone = Graph()
        clone._g = self._g.copy()
        clone._name_to_idx = dict(self._name_to_idx)
        clone._idx_to_name = list(self._idx_to_name)
        return clone

    def __contains__(self, name: str) -> bool:
        return self.contains_node(name)

    def __len__(self) -> int:
        return self.get_order()

    def __repr__(self) -> str:
        return f"Graph(order={self.get_order()}, size={self.get_size()})"
