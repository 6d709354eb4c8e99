"""Tests for snapshot history."""

import pytest
from meshgraph.graph.core import Graph
from meshgraph.graph.temporal import SnapshotHistory


def _graph_v1():
    g = Graph()
    for name in ("A", "B", "C"):
        g.add_node(name)
    g.add_edge("A", "B", 1.0)
    g.add_edge("B", "C", 1.0)
    g.add_edge("C", "A", 1.0)
    return g


def _graph_v2():
    g = _graph_v1().copy()
    g.add_node("D")
    g.add_edge("C", "D", 0.5)
    return g


class TestSnapshotHistory:
    def test_add_snapshot(self):
        history = SnapshotHistory()
        snap = history.add_snapshot(_graph_v1(), timestamp=100.0)
        assert snap.node_count == 3
        assert snap.edge_count == 3
        assert len(history) == 1

    def test_zero_timestamp_kept(self):
        history = SnapshotHistory()
        assert history.add_snapshot(_graph_v1(), timestamp=0.0).timestamp == 0.0

    def test_diff_added_node_and_edge(self):
        history = SnapshotHistory()
        s1 = history.add_snapshot(_graph_v1(), timestamp=100.0)
        s2 = history.add_snapshot(_graph_v2(), timestamp=200.0)
        delta = history.diff(s1, s2)
        assert delta.added_nodes == {"D"}
        assert delta.added_edges == {("C", "D")}
        assert not delta.removed_nodes
        assert not delta.is_stable

    def test_diff_reweighted(self):
        g2 = Graph()
        for name in ("A", "B", "C"):
            g2.add_node(name)
        g2.add_edge("A", "B", 0.4)
        g2.add_edge("B", "C", 1.0)
        g2.add_edge("C", "A", 1.0)
        history = SnapshotHistory()
        s1 = history.add_snapshot(_graph_v1(), timestamp=1.0)
        s2 = history.add_snapshot(g2, timestamp=2.0)
        delta = history.diff(s1, s2)
        assert delta.is_stable
        assert delta.reweighted_edges == [("A", "B", 1.0, 0.4)]
        assert delta.change_magnitude == 1

    def test_deltas_between_consecutive_snapshots(self):
        history = SnapshotHistory()
        history.add_snapshot(_graph_v1(), timestamp=1.0)
        history.add_snapshot(_graph_v2(), timestamp=2.0)
        history.add_snapshot(_graph_v2(), timestamp=3.0)
        deltas = history.get_deltas()
        assert [d.t_to for d in deltas] == [2.0, 3.0]
        assert not deltas[0].is_stable
        assert deltas[1].is_stable

    def test_max_snapshots(self):
        history = SnapshotHistory(max_snapshots=5)
        for i in range(10):
            history.add_snapshot(_graph_v1(), timestamp=float(i))
        assert len(history) == 5
        assert history.snapshots[0].timestamp == 5.0

    def test_evolution_stats(self):
        history = SnapshotHistory()
        history.add_snapshot(_graph_v1(), timestamp=100.0)
        history.add_snapshot(_graph_v2(), timestamp=200.0)
        stats = history.evolution_stats()
        assert stats["snapshots"] == 2
        assert stats["nodes_joined"] == 1
        assert stats["links_added"] == 1
        assert stats["time_span"] == pytest.approx(100.0)
        assert stats["stability_ratio"] == 0.0

    def test_evolution_stats_single_snapshot(self):
        history = SnapshotHistory()
        history.add_snapshot(_graph_v1(), timestamp=1.0)
        assert history.evolution_stats() == {"snapshots": 1}
