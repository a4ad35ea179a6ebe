"""
First Fresnel zone calculations.

The radius of the n-th Fresnel zone at a point splitting the path into
d1 and d2 is sqrt(n * wavelength * d1 * d2 / (d1 + d2)). Only the 1st zone at
the path midpoint is computed here, which is where the zone is widest.
"""
import math
from dataclasses import dataclass

from rf_link_planner.core.geometry import haversine_distance


# Exact SI value; the 3e8 approximation overstates wavelength by ~0.07%
SPEED_OF_LIGHT_M_S = 299792458.0


@dataclass(frozen=True)
class MidpointFresnel:
    """1st Fresnel zone cross-section at the middle of a path."""
    total_distance_m: float
    radius_m: float
    wavelength_m: float


def wavelength_m(frequency_hz: float) -> float:
    """
    Free-space wavelength for a frequency.

    Args:
        frequency_hz: Frequency in Hz

    Returns:
        Wavelength in meters, NaN for a non-positive or non-finite frequency
    """
    if not math.isfinite(frequency_hz) or frequency_hz <= 0:
        return math.nan
    return SPEED_OF_LIGHT_M_S / frequency_hz


def fresnel_radius(wavelength: float, d1: float, d2: float) -> float:
    """
    Radius of the 1st Fresnel zone at distances d1 and d2 from the endpoints.

    Args:
        wavelength: Wavelength (meters)
        d1: Distance from the first endpoint (meters)
        d2: Distance from the second endpoint (meters)

    Returns:
        Zone radius in meters; 0 for coincident endpoints (d1 + d2 == 0)

    Example:
        >>> # 5 GHz over a 100 km path
        >>> round(fresnel_radius(0.06, 50000, 50000), 2)
        38.73
    """
    total = d1 + d2
    if total == 0:
        return 0.0
    return math.sqrt(wavelength * d1 * d2 / total)


def compute_midpoint_fresnel(lat1: float, lon1: float,
                             lat2: float, lon2: float,
                             frequency_hz: float) -> MidpointFresnel:
    """Compute path length and midpoint 1st Fresnel radius between two points."""
    distance = haversine_distance(lat1, lon1, lat2, lon2)
    wavelength = wavelength_m(frequency_hz)
    radius = fresnel_radius(wavelength, distance / 2, distance / 2)

    return MidpointFresnel(
        total_distance_m=distance,
        radius_m=radius,
        wavelength_m=wavelength,
    )
