"""
Fresnel zone outline sampling.

Builds a closed polygon approximating the 1st Fresnel zone around a link, for
display on a map. Each sample is placed by two great-circle projections: first
along the path bearing, then perpendicular to it. That keeps the ellipse
aligned with the great-circle path instead of a flat lat/lon plane.

Known limitation: the ellipse center is the arithmetic (degree-wise) mean of
the endpoints, not the geodesic midpoint. This is fine at regional scale but
drifts on long paths, near the poles and across the antimeridian.
"""
from typing import List, Tuple

import numpy as np

from rf_link_planner.core.geometry import destination_point, get_distance_and_bearing
from rf_link_planner.utils.exceptions import GeometryError


DEFAULT_ELLIPSE_STEPS = 180


def generate_fresnel_ellipse(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius_m: float,
    steps: int = DEFAULT_ELLIPSE_STEPS
) -> List[Tuple[float, float]]:
    """
    Sample the Fresnel zone outline between two points.

    Args:
        lat1: Latitude of first endpoint (decimal degrees)
        lon1: Longitude of first endpoint (decimal degrees)
        lat2: Latitude of second endpoint (decimal degrees)
        lon2: Longitude of second endpoint (decimal degrees)
        radius_m: Semi-minor axis, i.e. the zone radius to draw (meters)
        steps: Number of segments; the ring has steps + 1 points

    Returns:
        List of (lat, lon) tuples; the last point repeats the first

    Raises:
        GeometryError: If steps is less than 1

    Example:
        >>> ring = generate_fresnel_ellipse(22.5, 77.5, 22.6, 77.9, 38.7)
        >>> len(ring)
        181
    """
    if steps < 1:
        raise GeometryError(f"Ellipse needs at least one segment, got steps={steps}")

    distance, bearing = get_distance_and_bearing(lat1, lon1, lat2, lon2)
    semi_major = distance / 2
    semi_minor = radius_m

    center_lat = (lat1 + lat2) / 2
    center_lon = (lon1 + lon2) / 2

    angles = np.arange(steps + 1) / steps * 2 * np.pi
    along = semi_major * np.cos(angles)
    across = semi_minor * np.sin(angles)

    points = []
    for x, y in zip(along, across):
        p_lat, p_lon = destination_point(center_lat, center_lon, bearing, float(x))
        points.append(destination_point(p_lat, p_lon, bearing + 90.0, float(y)))

    return points
