"""Tests for articulation point detection."""

import pytest
import networkx as nx
from meshgraph.algorithms.articulation import articulation_points, is_articulation_point
from meshgraph.errors import EmptyGraph
from meshgraph.graph.core import Graph


def _bowtie():
    # Two triangles sharing node "c"
    G = nx.Graph()
    G.add_edges_from([
        ("a", "b"), ("b", "c"), ("c", "a"),
        ("c", "d"), ("d", "e"), ("e", "c"),
    ])
    return Graph.from_networkx(G)


class TestArticulationPoints:
    def test_path(self):
        g = Graph.from_networkx(nx.path_graph(["1", "2", "3", "4"]))
        assert articulation_points(g) == frozenset({"2", "3"})

    def test_cycle_has_none(self):
        g = Graph.from_networkx(nx.cycle_graph(["1", "2", "3", "4"]))
        assert articulation_points(g) == frozenset()

    def test_bowtie(self):
        assert articulation_points(_bowtie()) == frozenset({"c"})

    def test_empty_graph_fails(self):
        with pytest.raises(EmptyGraph):
            articulation_points(Graph())

    def test_single_node(self):
        g = Graph()
        g.add_node("solo")
        assert articulation_points(g) == frozenset()

    def test_relabeling_invariance(self):
        G = nx.Graph()
        G.add_edges_from([
            ("a", "b"), ("b", "c"), ("c", "a"), ("c", "d"), ("d", "e"),
        ])
        mapping = {"a": "900", "b": "17", "c": "4", "d": "23", "e": "1"}
        original = articulation_points(Graph.from_networkx(G))
        relabeled = articulation_points(
            Graph.from_networkx(nx.relabel_nodes(G, mapping))
        )
        assert relabeled == frozenset(mapping[n] for n in original)

    def test_matches_removal_check(self):
        g = _bowtie()
        aps = articulation_points(g)
        for name in g.nodes():
            assert is_articulation_point(g, name) == (name in aps)
