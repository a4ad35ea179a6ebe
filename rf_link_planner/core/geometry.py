"""
Spherical-earth geodesy for point-to-point link planning.

Provides great-circle distance (haversine), initial bearing and the direct
geodesic (destination point) on a sphere of mean Earth radius.
"""
import math
from typing import Tuple


# Earth's radius in meters (mean radius)
EARTH_RADIUS_M = 6371000.0


def normalize_longitude(lon: float) -> float:
    """
    Wrap a longitude into the range [-180, 180).

    Args:
        lon: Longitude (decimal degrees), any value

    Returns:
        Equivalent longitude in [-180, 180)

    Example:
        >>> normalize_longitude(190.0)
        -170.0
    """
    return (lon + 540.0) % 360.0 - 180.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point (decimal degrees)
        lon1: Longitude of first point (decimal degrees)
        lat2: Latitude of second point (decimal degrees)
        lon2: Longitude of second point (decimal degrees)

    Returns:
        Distance in meters

    Example:
        >>> # One degree of longitude on the equator
        >>> distance = haversine_distance(0.0, 0.0, 0.0, 1.0)
        >>> print(f"{distance/1000:.1f} km")
        111.2 km

    References:
        https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2)) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * (math.sin(dlon / 2)) ** 2

    # Rounding can push a fraction above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate initial bearing (forward azimuth) from point 1 to point 2.

    The bearing is the angle (in degrees) measured clockwise from north
    to the direction of point 2 from point 1, along the great circle.

    Args:
        lat1: Latitude of starting point (decimal degrees)
        lon1: Longitude of starting point (decimal degrees)
        lat2: Latitude of destination point (decimal degrees)
        lon2: Longitude of destination point (decimal degrees)

    Returns:
        Bearing in degrees [0, 360), where 0 is North and 90 is East

    References:
        https://www.movable-type.co.uk/scripts/latlong.html
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    y = math.sin(dlon) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - \
        math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon)

    bearing_deg = math.degrees(math.atan2(y, x))

    # Normalize to 0-360
    return (bearing_deg + 360.0) % 360.0


def destination_point(lat: float, lon: float,
                      bearing_deg: float, distance_m: float) -> Tuple[float, float]:
    """
    Project a point along a great circle (direct geodesic problem on a sphere).

    Negative distances travel backwards along the bearing.

    Args:
        lat: Origin latitude (decimal degrees)
        lon: Origin longitude (decimal degrees)
        bearing_deg: Initial bearing from the origin (degrees, 0=North)
        distance_m: Distance to travel (meters)

    Returns:
        Tuple of (latitude, longitude) of the destination; longitude is
        wrapped to [-180, 180)

    Example:
        >>> lat, lon = destination_point(0.0, 0.0, 90.0, 111195.0)
        >>> print(f"{lat:.3f}, {lon:.3f}")
        0.000, 1.000
    """
    if distance_m == 0:
        return lat, lon

    lat1 = math.radians(lat)
    lon1 = math.radians(lon)
    brg = math.radians(bearing_deg)
    angular = distance_m / EARTH_RADIUS_M

    sin_lat2 = math.sin(lat1) * math.cos(angular) + \
        math.cos(lat1) * math.sin(angular) * math.cos(brg)
    # Clamp so rounding near the poles cannot leave asin's domain
    sin_lat2 = max(-1.0, min(1.0, sin_lat2))
    lat2 = math.asin(sin_lat2)

    lon2 = lon1 + math.atan2(
        math.sin(brg) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * sin_lat2
    )

    return math.degrees(lat2), normalize_longitude(math.degrees(lon2))


def get_distance_and_bearing(lat1: float, lon1: float,
                             lat2: float, lon2: float) -> Tuple[float, float]:
    """
    Calculate both distance and bearing between two points.

    Convenience function that combines haversine_distance and calculate_bearing.

    Returns:
        Tuple of (distance_meters, bearing_degrees)
    """
    distance = haversine_distance(lat1, lon1, lat2, lon2)
    bearing = calculate_bearing(lat1, lon1, lat2, lon2)

    return distance, bearing
