"""Configuration classes for MeshGraph components."""

from dataclasses import dataclass, field
from typing import Optional

# Fixed-point position scale factors (latitude_i / longitude_i are 1e-7 degrees)
LAT_CONVERSION_FACTOR = 1e-7
LON_CONVERSION_FACTOR = 1e-7
# Altitude is already reported in meters
ALT_CONVERSION_FACTOR = 1.0

EARTH_RADIUS_M = 6_371_000.0


@dataclass
class EdgeWeightConfig:
    """Coefficients of the distance / signal-quality edge weight."""

    distance_weight: float = 0.5
    quality_weight: float = 0.5


@dataclass
class DiffusionConfig:
    """Diffusion centrality parameters."""

    # Number of propagation rounds
    steps: int = 3

    # Per-round passing probability; None derives 1 / largest eigenvalue
    passing_probability: Optional[float] = None


@dataclass
class PredictionConfig:
    """Parameters of the default topology trend predictor."""

    # Number of most recent snapshots considered
    window: int = 10

    # Snapshots to extrapolate past the newest one
    horizon: int = 1

    # Minimum share of snapshots a node or link must appear in to survive
    presence_threshold: float = 0.5


@dataclass
class EngineConfig:
    """Top-level configuration of the analysis engine."""

    max_history: int = 100
    prefer_smaller: bool = True
    strict_mincut: bool = False
    weights: EdgeWeightConfig = field(default_factory=EdgeWeightConfig)
    diffusion: DiffusionConfig = field(default_factory=DiffusionConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)


DEFAULT_CONFIG = EngineConfig()
