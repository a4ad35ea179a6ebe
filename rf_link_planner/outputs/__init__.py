"""
Output generators for the RF link planner.

Writes tower/link tables, Fresnel zone GeoJSON and a run report.
"""

from rf_link_planner.outputs.exporter import (
    PlanExporter,
    fresnel_feature,
    fresnel_feature_collection,
)

__all__ = ['PlanExporter', 'fresnel_feature', 'fresnel_feature_collection']
