"""Edge - Directed traversable connection between two nodes.

An Edge is either a lift ride or a trail segment. Edges are one-way:
a trail segment skied in both directions needs two edge records.
No reverse edge is ever synthesized.

Trails are stored as many short segments (one per intersection), so a named
trail appears as several consecutive edges sharing the same name.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from skiresort_router.constants import EdgeTypes, RouteConfig


@dataclass(frozen=True)
class Edge:
    """A directed lift or trail segment.

    Attributes:
        id: Unique identifier scoped by kind (e.g., "lift-3", "segment-17")
        type: "lift" or "trail"
        start_point_id: ID of the node the edge leaves
        end_point_id: ID of the node the edge arrives at
        name: Display name (lift name, trail name, or "Connector")
        difficulty: Trail difficulty, None for lifts and connectors
        estimated_time_minutes: Travel time, the edge weight. None if unknown.
        requires_hike: Segment needs boot-packing (carried, not costed)
        trail_id: Owning trail record, None for lifts and connectors

    Example:
        edge = Edge(
            id="segment-4",
            type="trail",
            start_point_id=2,
            end_point_id=5,
            name="Trestle",
            difficulty="blue",
            estimated_time_minutes=3.0,
            trail_id=11,
        )
    """

    id: str
    type: str
    start_point_id: int
    end_point_id: int
    name: str
    difficulty: Optional[str] = None
    estimated_time_minutes: Optional[float] = None
    requires_hike: bool = False
    trail_id: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.type not in EdgeTypes.ALL:
            raise ValueError(f"Edge {self.id} has unknown type {self.type!r}, expected one of {EdgeTypes.ALL}")
        minutes = self.estimated_time_minutes
        if minutes is not None and (math.isnan(minutes) or minutes < 0):
            raise ValueError(f"Edge {self.id} has invalid estimated_time_minutes={minutes}")

    @property
    def is_lift(self) -> bool:
        return self.type == EdgeTypes.LIFT

    @property
    def is_trail(self) -> bool:
        return self.type == EdgeTypes.TRAIL

    @property
    def is_connector(self) -> bool:
        """Trail segment that belongs to no named trail."""
        return self.is_trail and self.trail_id is None

    @property
    def cost_minutes(self) -> float:
        """Search weight in minutes.

        Missing or zero times count as MISSING_COST_MINUTES so that every
        step of the search makes progress.
        """
        if not self.estimated_time_minutes:
            return RouteConfig.MISSING_COST_MINUTES
        return float(self.estimated_time_minutes)

    @property
    def time_minutes(self) -> float:
        """Raw travel time for display, zero when unknown."""
        return float(self.estimated_time_minutes or 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "start_point_id": self.start_point_id,
            "end_point_id": self.end_point_id,
            "name": self.name,
            "difficulty": self.difficulty,
            "estimated_time_minutes": self.estimated_time_minutes,
            "requires_hike": self.requires_hike,
            "trail_id": self.trail_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        """Create Edge from graph payload dictionary.

        Only trail segments without a trail may omit the name; they are named
        RouteConfig.CONNECTOR_NAME.

        Raises:
            ValueError: If a lift or a trail-owned segment has no name.
        """
        minutes = data.get("estimated_time_minutes")
        trail_id = data.get("trail_id")
        name = data.get("name")
        if not name:
            if data["type"] != EdgeTypes.TRAIL or trail_id is not None:
                raise ValueError(f"Edge {data['id']} of type {data['type']!r} has no name")
            name = RouteConfig.CONNECTOR_NAME
        return cls(
            id=str(data["id"]),
            type=data["type"],
            start_point_id=int(data["start_point_id"]),
            end_point_id=int(data["end_point_id"]),
            name=name,
            difficulty=data.get("difficulty"),
            estimated_time_minutes=float(minutes) if minutes is not None else None,
            requires_hike=bool(data.get("requires_hike", False)),
            trail_id=trail_id,
        )

    def __repr__(self) -> str:
        return (
            f"Edge({self.id}, {self.type}, {self.start_point_id}->{self.end_point_id}, "
            f"{self.name!r}, {self.estimated_time_minutes})"
        )
