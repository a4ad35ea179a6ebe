"""
RF link planner.

Plans point-to-point radio links between fixed towers and computes each
link's 1st Fresnel zone outline for display on a map.
"""
from rf_link_planner.core import (
    haversine_distance,
    calculate_bearing,
    destination_point,
    fresnel_radius,
    compute_midpoint_fresnel,
    generate_fresnel_ellipse,
    parse_frequency_hz,
    frequencies_match,
)
from rf_link_planner.data import Tower, Link, LinkState, FresnelVisualization
from rf_link_planner.graph import LinkGraphStore, LinkRejection, LinkResult
from rf_link_planner.utils.config import PlannerConfig, load_config, get_default_config

__version__ = "0.1.0"

__all__ = [
    'haversine_distance',
    'calculate_bearing',
    'destination_point',
    'fresnel_radius',
    'compute_midpoint_fresnel',
    'generate_fresnel_ellipse',
    'parse_frequency_hz',
    'frequencies_match',
    'Tower',
    'Link',
    'LinkState',
    'FresnelVisualization',
    'LinkGraphStore',
    'LinkRejection',
    'LinkResult',
    'PlannerConfig',
    'load_config',
    'get_default_config',
]
