"""
Pydantic schemas for the tower/link graph.

Defines towers, links between them and the cached Fresnel zone
visualization of a link, with validation rules for ids and coordinates.
"""
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, Field, model_validator

from rf_link_planner.core.frequency import parse_frequency_hz


class LinkState(Enum):
    """Lifecycle of a link."""
    PROPOSED = "PROPOSED"  # Only while create_link validates; never stored
    ACTIVE = "ACTIVE"
    REMOVED = "REMOVED"    # Terminal


class Tower(BaseModel):
    """
    Schema for a fixed RF tower.

    Example:
        >>> tower = Tower(id=1, lat=22.5, lon=77.5, frequency_spec='5 GHz')
        >>> tower.frequency_hz
        5000000000.0
    """
    id: int = Field(..., ge=1, description="Unique positive tower id")
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    frequency_spec: str = Field(..., description="Operating frequency text, e.g. '5 GHz'")

    @property
    def frequency_hz(self) -> float:
        """Resolved frequency in Hz (NaN if the text does not parse)."""
        return parse_frequency_hz(self.frequency_spec)

    # Changes go through LinkGraphStore.update_tower so incident links stay consistent
    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
        "allow_inf_nan": False,
    }


class FresnelVisualization(BaseModel):
    """
    Derived Fresnel zone outline for a link.

    ``radius_m`` is the physical midpoint radius; ``display_radius_m`` is the
    semi-minor axis the polygon was drawn with after display scaling.
    """
    polygon: List[Tuple[float, float]] = Field(..., description="Closed ring of (lat, lon) points")
    radius_m: float = Field(..., ge=0, description="1st Fresnel zone radius at midpoint (meters)")
    display_radius_m: float = Field(..., ge=0, description="Radius used for the drawn polygon (meters)")
    path_distance_m: float = Field(..., ge=0, description="Great-circle path length (meters)")
    wavelength_m: float = Field(..., gt=0, description="Wavelength used (meters)")
    frequency_spec: str = Field(..., description="Frequency text the zone was computed for")

    model_config = {"frozen": True}


class Link(BaseModel):
    """
    Schema for a point-to-point link between two towers.

    The endpoint pair is unordered: (a_id, b_id) and (b_id, a_id) name the
    same link.
    """
    id: int = Field(..., ge=1, frozen=True, description="Unique link id")
    a_id: int = Field(..., ge=1, frozen=True, description="First endpoint tower id")
    b_id: int = Field(..., ge=1, frozen=True, description="Second endpoint tower id")
    frequency_spec: str = Field(..., frozen=True, description="Frequency text snapshotted at creation")
    state: LinkState = Field(LinkState.PROPOSED)
    fresnel: Optional[FresnelVisualization] = Field(None, description="Cached visualization")

    @model_validator(mode='after')
    def check_distinct_endpoints(self):
        """A link needs two different towers."""
        if self.a_id == self.b_id:
            raise ValueError(f"Link endpoints must differ, got {self.a_id} twice")
        return self

    @property
    def pair(self) -> FrozenSet[int]:
        """Unordered endpoint key."""
        return frozenset((self.a_id, self.b_id))

    def touches(self, tower_id: int) -> bool:
        """Whether the link is incident to a tower."""
        return tower_id in (self.a_id, self.b_id)

    def other_end(self, tower_id: int) -> int:
        """Id of the endpoint opposite ``tower_id``."""
        return self.b_id if tower_id == self.a_id else self.a_id


class TowerRecord(BaseModel):
    """
    Schema for one row of a towers input file.

    Example:
        >>> record = TowerRecord(name='Hilltop', lat=22.5, lon=77.5, frequency='5.8 GHz')
    """
    name: str = Field(..., min_length=1, description="Unique tower name within the file")
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    frequency: Optional[str] = Field(None, description="Frequency text; planner default if empty")

    model_config = {
        "str_strip_whitespace": True,
        "allow_inf_nan": False,
    }


class LinkRequest(BaseModel):
    """Schema for one row of a links input file: two tower names."""
    a: str = Field(..., min_length=1, description="Name of the first tower")
    b: str = Field(..., min_length=1, description="Name of the second tower")

    model_config = {"str_strip_whitespace": True}
