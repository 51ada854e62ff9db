"""RouteStep - One user-facing instruction of a route.

A step is either "take this lift" or "ski this trail", produced by merging
consecutive segments of the same trail. Steps carry only display data:
aggregated time and the coordinates where the step begins and ends.
"""

from dataclasses import dataclass, replace
from typing import Any

from shapely.geometry import LineString

from skiresort_router.model.coords import Coords


@dataclass(frozen=True)
class RouteStep:
    """A single route instruction after edge aggregation.

    Attributes:
        id: ID of the first edge of the step
        name: Lift or trail name
        type: "lift" or "trail"
        estimated_time_minutes: Summed time of all merged edges
        start_coords: Where the step begins
        end_coords: Where the step ends

    Example:
        step = RouteStep(
            id="segment-4",
            name="Trestle",
            type="trail",
            estimated_time_minutes=12.0,
            start_coords=Coords(lat=39.61, lng=-105.95),
            end_coords=Coords(lat=39.60, lng=-105.94),
        )
    """

    id: str
    name: str
    type: str
    estimated_time_minutes: float
    start_coords: Coords
    end_coords: Coords

    def merged_with(self, other: "RouteStep") -> "RouteStep":
        """Extend this step by a following step of the same trail.

        Keeps this step's ID, name and start; adds the time and takes the end.
        """
        return replace(
            self,
            estimated_time_minutes=self.estimated_time_minutes + other.estimated_time_minutes,
            end_coords=other.end_coords,
        )

    @property
    def distance_m(self) -> float:
        """Straight-line distance from step start to step end in meters."""
        return self.start_coords.distance_to(other=self.end_coords)

    @property
    def bearing_deg(self) -> float:
        """Compass direction from step start to step end."""
        return self.start_coords.bearing_to(other=self.end_coords)

    def distance_from(self, lat: float, lng: float) -> float:
        """Distance in meters from a position (e.g., the skier's GPS fix) to the step end."""
        return Coords(lat=lat, lng=lng).distance_to(other=self.end_coords)

    def bearing_from(self, lat: float, lng: float) -> float:
        """Compass bearing from a position to the step end."""
        return Coords(lat=lat, lng=lng).bearing_to(other=self.end_coords)

    def get_linestring(self) -> LineString:
        """Get Shapely LineString from step start to end (lng, lat order)."""
        return LineString([self.start_coords.lng_lat, self.end_coords.lng_lat])

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "estimated_time_minutes": self.estimated_time_minutes,
            "start_coords": self.start_coords.to_dict(),
            "end_coords": self.end_coords.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RouteStep":
        """Create RouteStep from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            type=data["type"],
            estimated_time_minutes=float(data["estimated_time_minutes"]),
            start_coords=Coords.from_dict(data=data["start_coords"]),
            end_coords=Coords.from_dict(data=data["end_coords"]),
        )

    def __repr__(self) -> str:
        return f"RouteStep({self.type}, {self.name!r}, {self.estimated_time_minutes:g} min)"
