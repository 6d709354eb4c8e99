"""Tests for telemetry parsing."""

import json
import pytest
from meshgraph.ingest.telemetry import (
    MeshNode,
    Neighbor,
    NeighborInfo,
    TelemetryParser,
    add_observation,
    load_telemetry,
    observations_from_neighbor_info,
)


SAMPLE = {
    "nodes": [
        {"num": 1, "user": {"long_name": "Base", "short_name": "BS"},
         "position": {"latitude_i": 437022000, "longitude_i": -722882000, "altitude": 160}},
        {"num": 2, "position": {"latitude_i": 437030000, "longitude_i": -722890000}},
        {"num": 3},
    ],
    "neighbor_info": [
        {"id": 1, "timestamp": 50, "neighbors": [{"id": 2, "snr": 0.9}]},
        {"id": 2, "timestamp": 60, "neighbors": [{"id": 1, "snr": 0.1, "timestamp": 100}]},
    ],
    "observations": [
        {"source": 2, "neighbor": 3, "snr": 0.4, "timestamp": 10},
    ],
}


class TestNeighborInfo:
    def test_flatten(self):
        infos = [
            NeighborInfo(id=1, timestamp=0, neighbors=[Neighbor(2, 0.9), Neighbor(3, 0.5, 7)]),
        ]
        obs = observations_from_neighbor_info(infos)
        assert obs == {(1, 2): (0.9, 0), (1, 3): (0.5, 7)}

    def test_duplicate_keeps_later(self):
        infos = [
            NeighborInfo(id=1, timestamp=10, neighbors=[Neighbor(2, 0.9)]),
            NeighborInfo(id=1, timestamp=5, neighbors=[Neighbor(2, 0.2)]),
        ]
        assert observations_from_neighbor_info(infos) == {(1, 2): (0.9, 10)}

    def test_self_report_skipped(self):
        infos = [NeighborInfo(id=4, neighbors=[Neighbor(4, 1.0)])]
        assert observations_from_neighbor_info(infos) == {}

    def test_equal_timestamp_order_independent(self):
        a, b = {}, {}
        add_observation(a, 1, 2, 0.3, 5)
        add_observation(a, 1, 2, 0.8, 5)
        add_observation(b, 1, 2, 0.8, 5)
        add_observation(b, 1, 2, 0.3, 5)
        assert a == b == {(1, 2): (0.8, 5)}


class TestTelemetryParser:
    def test_parse_nodes(self):
        parser = TelemetryParser().parse_json(SAMPLE)
        assert set(parser.nodes) == {1, 2, 3}
        assert parser.nodes[1].position.altitude == 160
        assert parser.nodes[1].short_name == "BS"
        assert parser.nodes[2].position.altitude == 0
        assert parser.nodes[3].position is None

    def test_parse_observations(self):
        parser = TelemetryParser().parse_json(json.dumps(SAMPLE))
        assert parser.observations == {
            (1, 2): (0.9, 50),
            (2, 1): (0.1, 100),
            (2, 3): (0.4, 10),
        }

    def test_incremental(self):
        parser = TelemetryParser()
        parser.add_node(MeshNode(num=9))
        parser.add_neighbor_info(NeighborInfo(id=9, timestamp=3, neighbors=[Neighbor(8, 0.6)]))
        assert 9 in parser.nodes
        assert parser.observations == {(9, 8): (0.6, 3)}

    def test_load_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SAMPLE))
        observations, nodes = load_telemetry(str(path))
        assert len(observations) == 3
        assert len(nodes) == 3
