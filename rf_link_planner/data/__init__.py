"""
Data model and loading module.

Provides Pydantic schemas for towers, links and Fresnel visualizations, and
functions to load and validate tower and link CSV input.
"""
from rf_link_planner.data.schemas import (
    Tower,
    Link,
    LinkState,
    FresnelVisualization,
    TowerRecord,
    LinkRequest,
)
from rf_link_planner.data.loaders import load_towers, load_link_requests

__all__ = [
    'Tower',
    'Link',
    'LinkState',
    'FresnelVisualization',
    'TowerRecord',
    'LinkRequest',
    'load_towers',
    'load_link_requests',
]
