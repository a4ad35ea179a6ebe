"""
Tower/link graph store.

LinkGraphStore is the single owner of towers and links. Every mutation keeps
the two collections consistent:

- tower and link ids come from counters that only move forward, so an id is
  never handed out twice even after deletions;
- at most one link exists per unordered tower pair;
- both endpoints of a link resolve to the same frequency (relative tolerance);
- removing a tower removes its links, and changing a tower's frequency drops
  incident links that no longer match. Links are never repaired;
- a cached Fresnel visualization is discarded whenever an endpoint moves or
  changes frequency.

Link creation failures are returned as a LinkRejection, not raised.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

import pandas as pd
from pydantic import ValidationError

from rf_link_planner.core.ellipse import generate_fresnel_ellipse
from rf_link_planner.core.frequency import frequencies_match, parse_frequency_hz
from rf_link_planner.core.fresnel import compute_midpoint_fresnel
from rf_link_planner.core.geometry import haversine_distance
from rf_link_planner.data.schemas import FresnelVisualization, Link, LinkState, Tower
from rf_link_planner.utils.config import PlannerConfig, get_default_config
from rf_link_planner.utils.exceptions import TowerValidationError
from rf_link_planner.utils.logging_config import get_logger

logger = get_logger(__name__)

PATCHABLE_FIELDS = frozenset({'lat', 'lon', 'frequency_spec'})
GEOMETRY_FIELDS = frozenset({'lat', 'lon'})


class LinkRejection(Enum):
    """Why a link request was refused."""
    SELF_LINK = "SELF_LINK"
    MISSING_TOWER = "MISSING_TOWER"
    FREQUENCY_MISMATCH = "FREQUENCY_MISMATCH"
    DUPLICATE_LINK = "DUPLICATE_LINK"


@dataclass
class LinkResult:
    """Outcome of create_link: either a link or a rejection."""
    link: Optional[Link] = None
    rejection: Optional[LinkRejection] = None

    @property
    def ok(self) -> bool:
        """True when the link was created."""
        return self.link is not None


class LinkGraphStore:
    """
    In-memory tower/link graph for one planning session.

    Example:
        >>> store = LinkGraphStore()
        >>> a = store.add_tower(22.50, 77.50, "5 GHz")
        >>> b = store.add_tower(22.60, 77.90, "5000 MHz")
        >>> result = store.create_link(a.id, b.id)
        >>> result.ok
        True
        >>> viz = store.materialize_fresnel(result.link.id)
        >>> len(viz.polygon)
        181
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        self.config = config or get_default_config()
        self._towers: Dict[int, Tower] = {}
        self._links: Dict[int, Link] = {}
        self._pairs: Dict[FrozenSet[int], int] = {}
        self._next_tower_id = 1
        self._next_link_id = 1

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def towers(self) -> List[Tower]:
        """Towers in id order."""
        return [self._towers[k] for k in sorted(self._towers)]

    @property
    def links(self) -> List[Link]:
        """Active links in id order."""
        return [self._links[k] for k in sorted(self._links)]

    def get_tower(self, tower_id: int) -> Optional[Tower]:
        return self._towers.get(tower_id)

    def get_link(self, link_id: int) -> Optional[Link]:
        return self._links.get(link_id)

    def find_link(self, a_id: int, b_id: int) -> Optional[Link]:
        """Link between two towers, in either orientation."""
        link_id = self._pairs.get(frozenset((a_id, b_id)))
        return self._links.get(link_id) if link_id is not None else None

    def links_for_tower(self, tower_id: int) -> List[Link]:
        """Active links incident to a tower."""
        return [link for link in self.links if link.touches(tower_id)]

    def link_distance_m(self, link_id: int) -> Optional[float]:
        """Current great-circle length of a link, None for an unknown link."""
        link = self._links.get(link_id)
        if link is None:
            return None
        a = self._towers[link.a_id]
        b = self._towers[link.b_id]
        return haversine_distance(a.lat, a.lon, b.lat, b.lon)

    def cached_fresnel(self, link_id: int) -> Optional[FresnelVisualization]:
        """Cached visualization, None if never materialized or invalidated."""
        link = self._links.get(link_id)
        return link.fresnel if link is not None else None

    # ------------------------------------------------------------------
    # Towers
    # ------------------------------------------------------------------

    def add_tower(self, lat: float, lon: float,
                  frequency_spec: Optional[str] = None) -> Tower:
        """
        Add a tower at a position.

        Args:
            lat: Latitude (decimal degrees, -90..90)
            lon: Longitude (decimal degrees, -180..180)
            frequency_spec: Frequency text; the configured default when omitted

        Returns:
            The new Tower

        Raises:
            TowerValidationError: If the coordinates are out of range
        """
        if frequency_spec is None:
            frequency_spec = self.config.default_frequency_spec

        try:
            tower = Tower(id=self._next_tower_id, lat=lat, lon=lon,
                          frequency_spec=frequency_spec)
        except ValidationError as e:
            raise TowerValidationError(
                f"Invalid tower: {e.error_count()} validation error(s)",
                details={'errors': e.errors(include_url=False)},
            ) from e

        self._next_tower_id += 1
        self._towers[tower.id] = tower

        logger.debug("tower_added", tower_id=tower.id, lat=lat, lon=lon,
                     frequency_spec=tower.frequency_spec)
        return tower

    def update_tower(self, tower_id: int, **patch) -> Optional[Tower]:
        """
        Apply a patch to a tower and drop incident links that stop matching.

        Callers must assume links can disappear as a side effect. Surviving
        incident links lose their cached Fresnel visualization when the
        position or frequency changed.

        Args:
            tower_id: Tower to update
            **patch: Any of lat, lon, frequency_spec

        Returns:
            The updated Tower, or None if the tower does not exist

        Raises:
            TowerValidationError: If the patch has unknown fields or
                out-of-range values; the tower is left unchanged
        """
        tower = self._towers.get(tower_id)
        if tower is None:
            logger.warning("tower_update_unknown_id", tower_id=tower_id)
            return None

        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise TowerValidationError(
                f"Cannot patch fields: {sorted(unknown)}",
                tower_id=tower_id,
                details={'allowed': sorted(PATCHABLE_FIELDS)},
            )

        try:
            updated = Tower(**{**tower.model_dump(), **patch})
        except ValidationError as e:
            raise TowerValidationError(
                f"Invalid tower patch: {e.error_count()} validation error(s)",
                tower_id=tower_id,
                details={'errors': e.errors(include_url=False)},
            ) from e

        self._towers[tower_id] = updated

        moved = any(getattr(updated, f) != getattr(tower, f) for f in GEOMETRY_FIELDS)
        retuned = updated.frequency_spec != tower.frequency_spec

        dropped = []
        for link in self.links_for_tower(tower_id):
            peer = self._towers[link.other_end(tower_id)]
            if not self._towers_match(updated, peer):
                self._drop_link(link)
                dropped.append(link.id)
            elif moved or retuned:
                link.fresnel = None

        if dropped:
            logger.info("incident_links_dropped", tower_id=tower_id, link_ids=dropped)
        logger.debug("tower_updated", tower_id=tower_id, fields=sorted(patch))
        return updated

    def remove_tower(self, tower_id: int) -> bool:
        """
        Remove a tower and every link incident to it.

        Returns:
            True if the tower existed
        """
        if tower_id not in self._towers:
            return False

        cascaded = [link.id for link in self.links_for_tower(tower_id)]
        for link_id in cascaded:
            self._drop_link(self._links[link_id])
        del self._towers[tower_id]

        logger.info("tower_removed", tower_id=tower_id, cascaded_link_ids=cascaded)
        return True

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def create_link(self, a_id: int, b_id: int) -> LinkResult:
        """
        Link two towers if the graph rules allow it.

        Checks run in order: self link, missing tower, frequency mismatch,
        duplicate pair.

        Returns:
            LinkResult holding the new Link or the LinkRejection
        """
        rejection = self._check_link(a_id, b_id)
        if rejection is not None:
            logger.info("link_rejected", a_id=a_id, b_id=b_id, reason=rejection.value)
            return LinkResult(rejection=rejection)

        link = Link(
            id=self._next_link_id,
            a_id=a_id,
            b_id=b_id,
            frequency_spec=self._towers[a_id].frequency_spec,
        )
        self._next_link_id += 1

        link.state = LinkState.ACTIVE
        self._links[link.id] = link
        self._pairs[link.pair] = link.id

        logger.info("link_created", link_id=link.id, a_id=a_id, b_id=b_id,
                    frequency_spec=link.frequency_spec)
        return LinkResult(link=link)

    def remove_link(self, link_id: int) -> bool:
        """
        Remove a link unconditionally.

        Returns:
            True if the link existed
        """
        link = self._links.get(link_id)
        if link is None:
            return False
        self._drop_link(link)
        logger.info("link_removed", link_id=link_id)
        return True

    def materialize_fresnel(self, link_id: int) -> Optional[FresnelVisualization]:
        """
        Compute a link's Fresnel zone from current tower state and cache it.

        Returns:
            The FresnelVisualization, or None for an unknown link
        """
        link = self._links.get(link_id)
        if link is None:
            logger.warning("fresnel_unknown_link", link_id=link_id)
            return None

        a = self._towers[link.a_id]
        b = self._towers[link.b_id]

        midpoint = compute_midpoint_fresnel(
            a.lat, a.lon, b.lat, b.lon, parse_frequency_hz(link.frequency_spec)
        )
        display_radius = midpoint.radius_m * self.config.radius_scale_factor
        polygon = generate_fresnel_ellipse(
            a.lat, a.lon, b.lat, b.lon,
            display_radius,
            steps=self.config.ellipse_steps,
        )

        link.fresnel = FresnelVisualization(
            polygon=polygon,
            radius_m=midpoint.radius_m,
            display_radius_m=display_radius,
            path_distance_m=midpoint.total_distance_m,
            wavelength_m=midpoint.wavelength_m,
            frequency_spec=link.frequency_spec,
        )

        logger.debug("fresnel_materialized", link_id=link_id,
                     radius_m=round(midpoint.radius_m, 3),
                     path_distance_m=round(midpoint.total_distance_m, 1))
        return link.fresnel

    # ------------------------------------------------------------------
    # Tabular views
    # ------------------------------------------------------------------

    def towers_frame(self) -> pd.DataFrame:
        """Towers as a DataFrame, one row per tower."""
        columns = ['tower_id', 'lat', 'lon', 'frequency_spec', 'frequency_hz', 'link_count']
        rows = [
            {
                'tower_id': t.id,
                'lat': t.lat,
                'lon': t.lon,
                'frequency_spec': t.frequency_spec,
                'frequency_hz': t.frequency_hz,
                'link_count': len(self.links_for_tower(t.id)),
            }
            for t in self.towers
        ]
        return pd.DataFrame(rows, columns=columns)

    def links_frame(self) -> pd.DataFrame:
        """Links as a DataFrame, with current length and cached Fresnel radius."""
        columns = ['link_id', 'a_id', 'b_id', 'frequency_spec', 'distance_km', 'fresnel_radius_m']
        rows = [
            {
                'link_id': link.id,
                'a_id': link.a_id,
                'b_id': link.b_id,
                'frequency_spec': link.frequency_spec,
                'distance_km': self.link_distance_m(link.id) / 1000.0,
                'fresnel_radius_m': link.fresnel.radius_m if link.fresnel else None,
            }
            for link in self.links
        ]
        return pd.DataFrame(rows, columns=columns)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _towers_match(self, a: Tower, b: Tower) -> bool:
        return frequencies_match(a.frequency_hz, b.frequency_hz,
                                 rel_tol=self.config.frequency_tolerance)

    def _check_link(self, a_id: int, b_id: int) -> Optional[LinkRejection]:
        if a_id == b_id:
            return LinkRejection.SELF_LINK

        a = self._towers.get(a_id)
        b = self._towers.get(b_id)
        if a is None or b is None:
            return LinkRejection.MISSING_TOWER

        if not self._towers_match(a, b):
            return LinkRejection.FREQUENCY_MISMATCH

        if frozenset((a_id, b_id)) in self._pairs:
            return LinkRejection.DUPLICATE_LINK

        return None

    def _drop_link(self, link: Link) -> None:
        del self._links[link.id]
        del self._pairs[link.pair]
        link.state = LinkState.REMOVED
        link.fresnel = None
