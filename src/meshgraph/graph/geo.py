"""
Geodesic distance between mesh node positions.

Positions arrive as fixed-point integer degrees (1e-7 scale) plus an
altitude in meters.
"""

from math import asin, cos, radians, sin, sqrt

from ..config import (
    ALT_CONVERSION_FACTOR,
    EARTH_RADIUS_M,
    LAT_CONVERSION_FACTOR,
    LON_CONVERSION_FACTOR,
)


def surface_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in meters between two points given in degrees.
    https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1, lon1, lat2, lon2 = map(radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair past 1.0 for antipodal points
    return 2 * EARTH_RADIUS_M * asin(sqrt(min(h, 1.0)))


def total_distance(
    lat1: float,
    lon1: float,
    alt1: float,
    lat2: float,
    lon2: float,
    alt2: float,
) -> float:
    """Surface distance combined with the altitude difference, in meters."""
    surface = surface_distance(lat1, lon1, lat2, lon2)
    return sqrt(surface ** 2 + (alt2 - alt1) ** 2)


def position_distance(a, b) -> float:
    """Distance between two fixed-point Position records."""
    return total_distance(
        a.latitude_i * LAT_CONVERSION_FACTOR,
        a.longitude_i * LON_CONVERSION_FACTOR,
        a.altitude * ALT_CONVERSION_FACTOR,
        b.latitude_i * LAT_CONVERSION_FACTOR,
        b.longitude_i * LON_CONVERSION_FACTOR,
        b.altitude * ALT_CONVERSION_FACTOR,
    )
