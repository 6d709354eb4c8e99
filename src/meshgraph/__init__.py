"""
MeshGraph: Topology analytics for ad-hoc mesh radio networks.

Reconciles asymmetric, timestamped link telemetry into one weighted graph
per ingestion cycle and caches structural analyses of it: articulation
points, minimum cut, diffusion centrality, predicted topology and the
most similar historical topology.

License: MIT
"""

__version__ = "0.1.0"
