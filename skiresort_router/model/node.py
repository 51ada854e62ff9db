"""Node - Point of interest in the resort graph.

A Node is a place a skier can start from, pass through, or head for:
lodges, lift stations, trail intersections. Unnamed points of type "node"
exist only to join trail segments together.

Nodes do not own edges. Edges reference nodes by integer ID.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from skiresort_router.constants import NodeTypes
from skiresort_router.model.coords import Coords


@dataclass(frozen=True)
class Node:
    """A point in the resort graph.

    Attributes:
        id: Unique identifier within the resort
        name: Display name, None for unnamed connector points
        type: Category tag (lodge, intersection, lift_top, ...), display only
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        aliases: Alternative names users may search for

    Example:
        node = Node(id=1, name="Summit House", type="lodge", lat=39.61, lng=-105.95)
        print(node.coords)  # Coords(lat=39.61, lng=-105.95)
    """

    id: int
    name: Optional[str]
    type: str
    lat: float
    lng: float
    aliases: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        # Raises ValueError on non-finite coordinates
        Coords(lat=self.lat, lng=self.lng)

    @property
    def coords(self) -> Coords:
        """Position of the node."""
        return Coords(lat=self.lat, lng=self.lng)

    @property
    def is_point_of_interest(self) -> bool:
        """True for points users pick as start/end (not bare connector nodes)."""
        return self.type != NodeTypes.NODE

    @property
    def display_name(self) -> str:
        """Name for UI lists, falling back to the ID for unnamed points."""
        return self.name or f"Point {self.id}"

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name and aliases."""
        needle = query.strip().lower()
        if not needle:
            return True
        candidates = [self.name or "", *self.aliases]
        return any(needle in candidate.lower() for candidate in candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "lat": self.lat,
            "lng": self.lng,
            "aliases": list(self.aliases),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Create Node from graph payload dictionary (lat/lng keys)."""
        return cls(
            id=int(data["id"]),
            name=data.get("name"),
            type=data.get("type") or NodeTypes.NODE,
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            aliases=tuple(data.get("aliases") or ()),
        )

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "Node":
        """Create Node from a points-of-interest table row (latitude/longitude keys)."""
        return cls(
            id=int(row["id"]),
            name=row.get("name"),
            type=row.get("type") or NodeTypes.NODE,
            lat=float(row["latitude"]),
            lng=float(row["longitude"]),
            aliases=tuple(row.get("aliases") or ()),
        )

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.display_name!r}, {self.type})"
