"""
Mesh telemetry records and parsing.

Turns decoded node-info and neighbor-info reports into the two inputs of
the graph builder: an observation mapping keyed by ordered
(source, neighbor) node ids, and a node-id -> node record mapping.
Supports structured dicts / JSON text and per-packet record objects.
"""

import json
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..logging import get_logger

logger = get_logger(__name__)

# (source_id, neighbor_id) -> (snr, timestamp)
Observations = dict[tuple[int, int], tuple[float, int]]


@dataclass
class Position:
    """Fixed-point position as reported by a device."""
    latitude_i: int = 0   # degrees * 1e7
    longitude_i: int = 0  # degrees * 1e7
    altitude: int = 0     # meters


@dataclass
class MeshNode:
    """A known mesh device. Only ``position`` matters to the graph."""
    num: int
    position: Optional[Position] = None
    long_name: str = ""
    short_name: str = ""
    last_heard: int = 0
    device_metrics: dict = field(default_factory=dict)


@dataclass
class Neighbor:
    """One neighbor entry inside a neighbor-info report."""
    id: int
    snr: float
    timestamp: Optional[int] = None


@dataclass
class NeighborInfo:
    """A node's report of the neighbors it currently hears."""
    id: int
    timestamp: int = 0
    neighbors: list[Neighbor] = field(default_factory=list)


def add_observation(
    observations: Observations,
    source: int,
    neighbor: int,
    snr: float,
    timestamp: int,
) -> None:
    """Record a directed observation, keeping the later one per ordered pair.

    Equal timestamps keep the higher SNR so the result is order independent.
    """
    key = (int(source), int(neighbor))
    current = observations.get(key)
    if current is None or (timestamp, snr) > current[::-1]:
        observations[key] = (float(snr), int(timestamp))


def observations_from_neighbor_info(
    infos: Iterable[NeighborInfo],
) -> Observations:
    """Flatten neighbor-info reports into directed observations."""
    observations: Observations = {}
    for info in infos:
        for n in info.neighbors:
            if n.id == info.id:
                logger.debug("Skipping self-report from node %s", info.id)
                continue
            ts = n.timestamp if n.timestamp is not None else info.timestamp
            add_observation(observations, info.id, n.id, n.snr, ts)
    return observations


class TelemetryParser:
    """
    Accumulate one telemetry snapshot from structured data.

    Accepted JSON layout::

        {
          "nodes": [{"num": 1, "position": {"latitude_i": ..., "longitude_i": ...,
                                            "altitude": ...}}],
          "neighbor_info": [{"id": 1, "timestamp": 10,
                             "neighbors": [{"id": 2, "snr": 6.5}]}],
          "observations": [{"source": 1, "neighbor": 2, "snr": 6.5,
                            "timestamp": 10}]
        }
    """

    def __init__(self):
        self.nodes: dict[int, MeshNode] = {}
        self.observations: Observations = {}

    def parse_json(self, data: dict | str) -> "TelemetryParser":
        if isinstance(data, str):
            data = json.loads(data)

        for entry in data.get("nodes", []):
            node = self._parse_node(entry)
            self.nodes[node.num] = node

        infos = [self._parse_neighbor_info(e) for e in data.get("neighbor_info", [])]
        for (src, dst), (snr, ts) in observations_from_neighbor_info(infos).items():
            add_observation(self.observations, src, dst, snr, ts)

        for entry in data.get("observations", []):
            add_observation(
                self.observations,
                entry["source"],
                entry["neighbor"],
                entry.get("snr", entry.get("quality", 0.0)),
                entry.get("timestamp", 0),
            )

        logger.debug(
            "Parsed %d nodes and %d observations",
            len(self.nodes), len(self.observations),
        )
        return self

    def add_neighbor_info(self, info: NeighborInfo) -> None:
        for (src, dst), (snr, ts) in observations_from_neighbor_info([info]).items():
            add_observation(self.observations, src, dst, snr, ts)

    def add_node(self, node: MeshNode) -> None:
        self.nodes[node.num] = node

    @staticmethod
    def _parse_node(entry: dict) -> MeshNode:
        pos = entry.get("position")
        position = None
        if pos is not None:
            position = Position(
                latitude_i=int(pos.get("latitude_i", 0)),
                longitude_i=int(pos.get("longitude_i", 0)),
                altitude=int(pos.get("altitude", 0)),
            )
        user = entry.get("user", {})
        return MeshNode(
            num=int(entry["num"]),
            position=position,
            long_name=user.get("long_name", entry.get("long_name", "")),
            short_name=user.get("short_name", entry.get("short_name", "")),
            last_heard=int(entry.get("last_heard", 0)),
            device_metrics=entry.get("device_metrics", {}),
        )

    @staticmethod
    def _parse_neighbor_info(entry: dict) -> NeighborInfo:
        return NeighborInfo(
            id=int(entry["id"]),
            timestamp=int(entry.get("timestamp", 0)),
            neighbors=[
                Neighbor(
                    id=int(n["id"]),
                    snr=float(n.get("snr", 0.0)),
                    timestamp=n.get("timestamp"),
                )
                for n in entry.get("neighbors", [])
            ],
        )


def load_telemetry(filepath: str) -> tuple[Observations, dict[int, MeshNode]]:
    """Convenience: parse a telemetry JSON file."""
    with open(filepath) as f:
        parser = TelemetryParser().parse_json(f.read())
    return parser.observations, parser.nodes
