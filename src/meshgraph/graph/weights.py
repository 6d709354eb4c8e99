"""
Edge weight combination of link distance and signal quality.

A weight function maps the distance and quality vectors of one
snapshot's resolved links to a weight vector. The default scales
distance by its largest value and rescales quality onto [0, 1] by its
range within the snapshot, then blends the two with configurable
coefficients. Weights are never negative, whatever sign the radio
reports SNR in, and a lone link weighs
``distance_weight + quality_weight``.
"""

from typing import Callable, Optional

import numpy as np

from ..config import EdgeWeightConfig

WeightFunction = Callable[[np.ndarray, np.ndarray], np.ndarray]


def normalize_vector(values: np.ndarray) -> np.ndarray:
    """Scale by the largest magnitude; an all-zero vector stays zero."""
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return values
    peak = np.max(np.abs(values))
    if peak == 0:
        return np.zeros_like(values)
    return values / peak


def rescale_vector(values: np.ndarray) -> np.ndarray:
    """Min-max rescale onto [0, 1]; a constant vector maps to all ones."""
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return values
    low, high = np.min(values), np.max(values)
    if high == low:
        return np.ones_like(values)
    return (values - low) / (high - low)


class NormalizedBlend:
    """w = distance_weight * d/max(d) + quality_weight * (q - min q)/(max q - min q)"""

    def __init__(self, config: Optional[EdgeWeightConfig] = None):
        self.config = config or EdgeWeightConfig()

    def __call__(self, distances: np.ndarray, qualities: np.ndarray) -> np.ndarray:
        distances = np.asarray(distances, dtype=np.float64)
        qualities = np.asarray(qualities, dtype=np.float64)
        if distances.shape != qualities.shape:
            raise ValueError(
                f"Distance/quality length mismatch: {distances.shape} vs {qualities.shape}"
            )
        return (
            self.config.distance_weight * normalize_vector(distances)
            + self.config.quality_weight * rescale_vector(qualities)
        )

    def __repr__(self) -> str:
        return (
            f"NormalizedBlend(distance_weight={self.config.distance_weight}, "
            f"quality_weight={self.config.quality_weight})"
        )


def default_weight_function() -> WeightFunction:
    return NormalizedBlend()
