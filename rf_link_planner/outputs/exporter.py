"""
Plain-data output files for a planning session.

Writes what a presentation layer needs to draw a plan without calling the
planner itself:

1. towers.csv - one row per tower
2. links.csv - one row per active link with length and Fresnel radius
3. fresnel.geojson - Fresnel zone polygons as a GeoJSON FeatureCollection
4. report.json - counts and the link requests that were rejected
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rf_link_planner.data.schemas import Link
from rf_link_planner.graph.store import LinkGraphStore
from rf_link_planner.utils.error_handling import safe_division
from rf_link_planner.utils.logging_config import get_logger

logger = get_logger(__name__)


def fresnel_feature(link: Link) -> Optional[Dict[str, Any]]:
    """
    GeoJSON Polygon feature for a link's cached Fresnel zone.

    GeoJSON uses (lon, lat) order, the reverse of the planner's points.

    Returns:
        Feature dict, or None when the link has no cached visualization
    """
    if link.fresnel is None:
        return None

    viz = link.fresnel
    ring = [[lon, lat] for lat, lon in viz.polygon]
    return {
        'type': 'Feature',
        'geometry': {'type': 'Polygon', 'coordinates': [ring]},
        'properties': {
            'link_id': link.id,
            'a_id': link.a_id,
            'b_id': link.b_id,
            'frequency': viz.frequency_spec,
            'radius_m': round(viz.radius_m, 3),
            'display_radius_m': round(viz.display_radius_m, 3),
            'distance_km': round(viz.path_distance_m / 1000.0, 3),
        },
    }


def fresnel_feature_collection(store: LinkGraphStore) -> Dict[str, Any]:
    """FeatureCollection of every active link with a cached Fresnel zone."""
    features = [f for f in (fresnel_feature(link) for link in store.links) if f is not None]
    return {'type': 'FeatureCollection', 'features': features}


class PlanExporter:
    """
    Writer for the output files of one planning run.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_all(
        self,
        store: LinkGraphStore,
        rejected: Optional[List[Dict[str, Any]]] = None,
        requested: int = 0,
    ) -> Dict[str, Path]:
        """
        Write all output files.

        Args:
            store: Store holding the final plan
            rejected: Rejected link requests, each a dict with at least
                ``a``, ``b`` and ``reason``
            requested: Number of link requests made during the run

        Returns:
            Mapping of output name to written path
        """
        paths = {
            'towers': self.output_dir / 'towers.csv',
            'links': self.output_dir / 'links.csv',
            'fresnel': self.output_dir / 'fresnel.geojson',
            'report': self.output_dir / 'report.json',
        }

        store.towers_frame().to_csv(paths['towers'], index=False)
        store.links_frame().to_csv(paths['links'], index=False)

        collection = fresnel_feature_collection(store)
        with open(paths['fresnel'], 'w') as f:
            json.dump(collection, f, indent=2)

        report = self.build_report(store, rejected or [], requested)
        with open(paths['report'], 'w') as f:
            json.dump(report, f, indent=2)

        logger.info(
            "plan_exported",
            output_dir=str(self.output_dir),
            towers=report['tower_count'],
            links=report['link_count'],
            polygons=len(collection['features']),
        )
        return paths

    @staticmethod
    def build_report(store: LinkGraphStore, rejected: List[Dict[str, Any]],
                     requested: int = 0) -> Dict[str, Any]:
        """Summary of the plan and its rejected link requests."""
        reasons: Dict[str, int] = {}
        for item in rejected:
            reasons[item['reason']] = reasons.get(item['reason'], 0) + 1

        return {
            'generated_at': datetime.now().isoformat(timespec='seconds'),
            'tower_count': len(store.towers),
            'link_count': len(store.links),
            'rejected_count': len(rejected),
            'acceptance_rate': safe_division(requested - len(rejected), requested),
            'rejections_by_reason': reasons,
            'rejected': rejected,
        }
