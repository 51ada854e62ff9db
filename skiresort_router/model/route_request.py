"""RouteRequest - A user's routing query.

Ephemeral input: built per request, never stored.
Validation happens before construction (see ui/validators.py).
"""

from dataclasses import dataclass, field
from typing import Any

from skiresort_router.constants import EntityPrefixes


def normalize_lift_id(lift_id: int | str) -> str:
    """Turn a raw lift record ID into its edge ID.

    Accepts either the numeric lift ID the route form sends (3, "3")
    or an already prefixed edge ID ("lift-3").
    """
    text = str(lift_id)
    if text.startswith(EntityPrefixes.LIFT):
        return text
    return EntityPrefixes.lift_edge_id(int(text))


@dataclass(frozen=True)
class RouteRequest:
    """Routing query for one resort.

    Attributes:
        ski_area_id: Resort the route is planned in
        start_point_id: Node to start from
        end_point_id: Node to arrive at
        max_difficulty: Difficulty ceiling for trail edges
        avoid_lifts: Lift edge IDs the route must not use

    Example:
        request = RouteRequest(
            ski_area_id=1,
            start_point_id=4,
            end_point_id=9,
            max_difficulty="blue",
            avoid_lifts=frozenset({"lift-2"}),
        )
    """

    ski_area_id: int
    start_point_id: int
    end_point_id: int
    max_difficulty: str
    avoid_lifts: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_trivial(self) -> bool:
        """Start and end are the same point."""
        return self.start_point_id == self.end_point_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "ski_area_id": self.ski_area_id,
            "start_point_id": self.start_point_id,
            "end_point_id": self.end_point_id,
            "max_difficulty": self.max_difficulty,
            "avoid_lifts": sorted(self.avoid_lifts),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RouteRequest":
        """Create RouteRequest from a route endpoint payload."""
        return cls(
            ski_area_id=int(data["ski_area_id"]),
            start_point_id=int(data["start_point_id"]),
            end_point_id=int(data["end_point_id"]),
            max_difficulty=data["max_difficulty"],
            avoid_lifts=frozenset(normalize_lift_id(lift_id) for lift_id in data.get("avoid_lifts") or ()),
        )
