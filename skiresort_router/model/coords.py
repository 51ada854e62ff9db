"""Coords - The geometry atom for route display.

A Coords value is a single WGS84 position. Routing never reads it; it only
travels along to the presentation layer (step start/end, compass).

Used by:
- Node (its position)
- RouteStep (start_coords / end_coords)
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from skiresort_router.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class Coords:
    """A geographic position.

    Attributes:
        lat: Latitude in decimal degrees (WGS84)
        lng: Longitude in decimal degrees (WGS84)

    Example:
        top = Coords(lat=39.606, lng=-105.944)
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not (np.isfinite(self.lat) and np.isfinite(self.lng)):
            raise ValueError(f"Coords must be finite, got lat={self.lat}, lng={self.lng}")

    @classmethod
    def origin(cls) -> "Coords":
        """Fallback position used when a node cannot be resolved."""
        return cls(lat=0.0, lng=0.0)

    @property
    def lng_lat(self) -> tuple[float, float]:
        """Return (lng, lat) tuple - GeoJSON order."""
        return (self.lng, self.lat)

    def distance_to(self, other: "Coords") -> float:
        """Great-circle distance to another position in meters."""
        return GeoCalculator.haversine_distance_m(lat1=self.lat, lng1=self.lng, lat2=other.lat, lng2=other.lng)

    def bearing_to(self, other: "Coords") -> float:
        """Initial compass bearing to another position in degrees."""
        return GeoCalculator.initial_bearing_deg(lat1=self.lat, lng1=self.lng, lat2=other.lat, lng2=other.lng)

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coords":
        """Create Coords from dictionary."""
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))
