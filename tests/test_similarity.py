"""Tests for historical similarity search."""

import pytest
from meshgraph.algorithms.similarity import WeightedJaccard, most_similar, rank_history
from meshgraph.errors import AnalysisFailed
from meshgraph.graph.core import Graph


def _graph(edges):
    g = Graph()
    for name in sorted({n for a, b, _ in edges for n in (a, b)}):
        g.add_node(name)
    for a, b, w in edges:
        g.add_edge(a, b, w)
    return g


class TestWeightedJaccard:
    def test_identical(self):
        g = _graph([("1", "2", 0.5), ("2", "3", 1.0)])
        assert WeightedJaccard().score(g, g) == pytest.approx(1.0)

    def test_disjoint(self):
        a = _graph([("1", "2", 0.5)])
        b = _graph([("3", "4", 0.5)])
        assert WeightedJaccard().score(a, b) == 0.0

    def test_weight_difference(self):
        a = _graph([("1", "2", 1.0)])
        b = _graph([("1", "2", 0.5)])
        # nodes identical, edges 0.5 / 1.0
        assert WeightedJaccard().score(a, b) == pytest.approx(0.75)

    def test_empty_graphs(self):
        assert WeightedJaccard().score(Graph(), Graph()) == 1.0

    def test_invalid_share(self):
        with pytest.raises(ValueError):
            WeightedJaccard(node_share=2.0)


class TestMostSimilar:
    def test_picks_closest(self):
        current = _graph([("1", "2", 1.0), ("2", "3", 1.0)])
        history = [
            _graph([("4", "5", 1.0)]),
            _graph([("1", "2", 1.0), ("2", "3", 0.9)]),
            _graph([("1", "2", 0.2)]),
        ]
        assert most_similar(current, history) is history[1]

    def test_ties_prefer_newest(self):
        current = _graph([("1", "2", 1.0)])
        history = [_graph([("1", "2", 1.0)]), _graph([("1", "2", 1.0)])]
        assert most_similar(current, history) is history[1]

    def test_rank_order(self):
        current = _graph([("1", "2", 1.0)])
        history = [_graph([("1", "2", 0.5)]), _graph([("1", "2", 1.0)])]
        ranked = rank_history(current, history)
        assert [i for i, _ in ranked] == [1, 0]

    def test_no_history(self):
        with pytest.raises(AnalysisFailed):
            most_similar(Graph(), [])
