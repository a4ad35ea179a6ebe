"""
Core algorithm modules for RF link planning.

Contains the spherical geodesy kernel, frequency-spec parsing, Fresnel zone
math and the Fresnel ellipse sampler.
"""
from rf_link_planner.core.geometry import (
    haversine_distance,
    calculate_bearing,
    destination_point,
    get_distance_and_bearing,
    normalize_longitude,
    EARTH_RADIUS_M,
)
from rf_link_planner.core.frequency import (
    parse_frequency_hz,
    frequencies_match,
    specs_match,
)
from rf_link_planner.core.fresnel import (
    MidpointFresnel,
    wavelength_m,
    fresnel_radius,
    compute_midpoint_fresnel,
    SPEED_OF_LIGHT_M_S,
)
from rf_link_planner.core.ellipse import generate_fresnel_ellipse, DEFAULT_ELLIPSE_STEPS

__all__ = [
    'haversine_distance',
    'calculate_bearing',
    'destination_point',
    'get_distance_and_bearing',
    'normalize_longitude',
    'EARTH_RADIUS_M',
    'parse_frequency_hz',
    'frequencies_match',
    'specs_match',
    'MidpointFresnel',
    'wavelength_m',
    'fresnel_radius',
    'compute_midpoint_fresnel',
    'SPEED_OF_LIGHT_M_S',
    'generate_fresnel_ellipse',
    'DEFAULT_ELLIPSE_STEPS',
]
