"""Tests for the name-addressed mesh graph."""

import pytest
import networkx as nx
from meshgraph.graph.core import Edge, Graph


def _triangle():
    g = Graph()
    for name in ("a", "b", "c"):
        g.add_node(name)
    g.add_edge("a", "b", 1.0)
    g.add_edge("b", "c", 0.5)
    g.add_edge("a", "c", 0.25)
    return g


class TestGraphNodes:
    def test_new_graph_is_empty(self):
        g = Graph()
        assert g.get_order() == 0
        assert g.get_size() == 0

    def test_add_node_idempotent(self):
        g = Graph()
        g.add_node("1")
        idx = g.get_node_idx("1")
        g.add_node("1")
        assert g.get_order() == 1
        assert g.get_node_idx("1") == idx

    def test_indices_are_dense_and_stable(self):
        g = Graph()
        for name in ("x", "y", "z"):
            g.add_node(name)
        assert [g.get_node_idx(n) for n in ("x", "y", "z")] == [0, 1, 2]
        g.add_node("y")
        g.add_node("w")
        assert g.get_node_idx("y") == 1
        assert g.get_node_idx("w") == 3

    def test_contains_node(self):
        g = Graph()
        g.add_node("a")
        assert g.contains_node("a")
        assert not g.contains_node("b")
        assert "a" in g

    def test_missing_node_index_fails_fast(self):
        g = Graph()
        with pytest.raises(KeyError):
            g.get_node_idx("ghost")


class TestGraphEdges:
    def test_add_edge_from_struct(self):
        g = Graph()
        g.add_node("a")
        g.add_node("b")
        g.add_edge_from_struct(Edge(g.get_node_idx("a"), g.get_node_idx("b"), 0.7))
        assert g.get_size() == 1
        assert g.get_edge_weight("a", "b") == 0.7

    def test_weight_is_symmetric(self):
        g = _triangle()
        assert g.get_edge_weight("b", "c") == g.get_edge_weight("c", "b")

    def test_direction_flags_do_not_change_weight(self):
        g = _triangle()
        assert g.get_edge_weight("a", "b", True, True) == 1.0
        assert g.get_edge_weight("a", "b", False, False) == 1.0

    def test_no_parallel_edges(self):
        g = _triangle()
        with pytest.raises(ValueError):
            g.add_edge("b", "a", 3.0)
        assert g.get_size() == 3
        assert g.get_edge_weight("a", "b") == 1.0

    def test_no_self_loops(self):
        g = _triangle()
        with pytest.raises(ValueError):
            g.add_edge("a", "a", 1.0)

    def test_edge_endpoints_must_exist(self):
        g = Graph()
        g.add_node("a")
        with pytest.raises(KeyError):
            g.add_edge_from_struct(Edge(0, 5, 1.0))

    def test_missing_edge_weight(self):
        g = Graph()
        g.add_node("a")
        g.add_node("b")
        assert not g.has_edge("a", "b")
        with pytest.raises(KeyError):
            g.get_edge_weight("a", "b")

    def test_neighbors_and_degree(self):
        g = _triangle()
        assert set(g.neighbors("a")) == {"b", "c"}
        assert g.degree("c") == 2

    def test_origin(self):
        g = Graph()
        g.add_node("1")
        g.add_node("2")
        g.add_edge("1", "2", 1.0, origin=("2", "1"))
        assert g.get_edge_origin("1", "2") == ("2", "1")


class TestGraphConversion:
    def test_to_networkx_uses_names(self):
        G = _triangle().to_networkx()
        assert set(G.nodes()) == {"a", "b", "c"}
        assert G["a"]["c"]["weight"] == 0.25

    def test_from_networkx(self):
        G = nx.path_graph(["p", "q", "r"])
        g = Graph.from_networkx(G)
        assert g.get_order() == 3
        assert g.get_size() == 2
        assert g.get_edge_weight("p", "q") == 1.0

    def test_node_link_round_trip(self):
        g = _triangle()
        restored = Graph.from_node_link(g.to_node_link())
        assert set(restored.nodes()) == set(g.nodes())
        assert restored.get_edge_weight("b", "c") == 0.5

    def test_copy_is_independent(self):
        g = _triangle()
        clone = g.copy()
        clone.add_node("d")
        assert g.get_order() == 3
        assert clone.get_order() == 4
