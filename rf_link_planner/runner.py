"""
Batch runner for RF link planning.

Builds a plan from CSV input without a map UI:
1. Add every tower from the towers file
2. Request every link from the links file (rejections are recorded, not fatal)
3. Materialize the Fresnel zone of every created link
4. Write towers.csv, links.csv, fresnel.geojson and report.json

Usage:
    python -m rf_link_planner.runner --towers data/towers.csv --links data/links.csv

    # Exaggerated Fresnel polygons and JSON logs
    python -m rf_link_planner.runner --towers data/towers.csv --links data/links.csv \\
        --config config/planner.yaml --json-logs
"""
import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from rf_link_planner.data.loaders import load_towers, load_link_requests
from rf_link_planner.graph.store import LinkGraphStore, LinkRejection
from rf_link_planner.outputs.exporter import PlanExporter
from rf_link_planner.utils.config import PlannerConfig, load_config, get_default_config
from rf_link_planner.utils.exceptions import LinkPlannerError
from rf_link_planner.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_plan(
    towers_df: pd.DataFrame,
    links_df: Optional[pd.DataFrame] = None,
    config: Optional[PlannerConfig] = None,
) -> Tuple[LinkGraphStore, List[Dict[str, Any]], Dict[str, int]]:
    """
    Populate a store from loaded tower and link tables.

    Args:
        towers_df: Towers with columns name, lat, lon, frequency
        links_df: Link requests with columns a, b (tower names)
        config: Planner configuration

    Returns:
        Tuple of (store, rejected link requests, tower name -> tower id)
    """
    store = LinkGraphStore(config)
    name_to_id: Dict[str, int] = {}

    for row in towers_df.itertuples(index=False):
        frequency = None if pd.isna(row.frequency) else row.frequency
        tower = store.add_tower(float(row.lat), float(row.lon), frequency)
        name_to_id[row.name] = tower.id

    rejected: List[Dict[str, Any]] = []
    if links_df is not None:
        for row in links_df.itertuples(index=False):
            a_id = name_to_id.get(row.a)
            b_id = name_to_id.get(row.b)
            if a_id is None or b_id is None:
                reason = LinkRejection.MISSING_TOWER
            else:
                result = store.create_link(a_id, b_id)
                if result.ok:
                    continue
                reason = result.rejection
            rejected.append({'a': row.a, 'b': row.b, 'reason': reason.value})

    for link in store.links:
        store.materialize_fresnel(link.id)

    logger.info(
        "plan_built",
        towers=len(store.towers),
        links=len(store.links),
        rejected=len(rejected),
    )
    return store, rejected, name_to_id


def run(
    towers_path: Path,
    links_path: Optional[Path] = None,
    output_dir: Path = Path('output'),
    config: Optional[PlannerConfig] = None,
) -> Dict[str, Path]:
    """
    Load input files, build the plan and export it.

    Each planned link is logged as a ``link_planned`` event.

    Returns:
        Mapping of output name to written path
    """
    config = config or get_default_config()

    towers_df = load_towers(towers_path)
    links_df = load_link_requests(links_path) if links_path else None

    store, rejected, _ = build_plan(towers_df, links_df, config)

    for row in store.links_frame().itertuples(index=False):
        logger.info(
            "link_planned",
            link_id=int(row.link_id),
            a_id=int(row.a_id),
            b_id=int(row.b_id),
            frequency_spec=row.frequency_spec,
            distance_km=round(float(row.distance_km), 3),
            fresnel_radius_m=round(float(row.fresnel_radius_m), 3),
        )

    requested = len(links_df) if links_df is not None else 0
    return PlanExporter(output_dir).write_all(store, rejected, requested=requested)


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description='RF Link Planner - batch link and Fresnel zone planning',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan links between towers and write outputs to ./output
  rf-link-plan --towers towers.csv --links links.csv

  # Use a planner config (default frequency, ellipse resolution, display scale)
  rf-link-plan --towers towers.csv --links links.csv --config config/planner.yaml
        """
    )

    parser.add_argument(
        '--towers',
        type=Path,
        required=True,
        help='CSV file with columns name, lat, lon[, frequency]'
    )

    parser.add_argument(
        '--links',
        type=Path,
        default=None,
        help='CSV file with columns a, b naming towers to link'
    )

    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('output'),
        help='Directory for output files (default: output)'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Planner YAML config (default: built-in defaults)'
    )

    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=None,
        help='Override the configured log level (DEBUG, INFO, WARNING, ERROR)'
    )

    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON logs'
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_default_config()
    except (FileNotFoundError, LinkPlannerError) as e:
        configure_logging()
        logger.error("Configuration failed", error=str(e))
        return 1

    configure_logging(
        log_level=args.log_level or config.logging.log_level,
        log_file=config.logging.log_file,
        json_output=args.json_logs or config.logging.json_output,
    )

    try:
        run(
            towers_path=args.towers,
            links_path=args.links,
            output_dir=args.output_dir,
            config=config,
        )
        return 0
    except LinkPlannerError as e:
        logger.error("Execution failed", error=str(e), exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
