"""RouteResult - Outcome of planning one route request.

Distinguishes the two empty outcomes the presentation layer must tell apart:
- found=True with no steps: start equals end (trivial route)
- found=False: no route exists under the request's constraints
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from shapely.geometry import mapping

from skiresort_router.model.edge import Edge
from skiresort_router.model.route_request import RouteRequest
from skiresort_router.model.route_step import RouteStep


@dataclass(frozen=True)
class RouteResult:
    """Planned route for a request.

    Attributes:
        request: The request that was planned
        edges: Raw edge sequence from the search, None if no route exists
        steps: Reduced display steps (empty if no route or trivial route)
    """

    request: RouteRequest
    edges: Optional[list[Edge]]
    steps: list[RouteStep] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.edges is not None

    @property
    def is_trivial(self) -> bool:
        return self.edges == []

    @property
    def total_minutes(self) -> float:
        """Search cost of the route (missing edge times count as one minute)."""
        if not self.edges:
            return 0.0
        return sum(edge.cost_minutes for edge in self.edges)

    @property
    def lift_count(self) -> int:
        return sum(1 for step in self.steps if step.type == "lift")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the public route endpoint."""
        return {
            "found": self.found,
            "total_minutes": self.total_minutes,
            "path": [step.to_dict() for step in self.steps],
        }

    def to_geojson(self) -> dict[str, Any]:
        """GeoJSON FeatureCollection with one LineString per step."""
        features = []
        for index, step in enumerate(self.steps):
            features.append(
                {
                    "type": "Feature",
                    "geometry": mapping(step.get_linestring()),
                    "properties": {
                        "order": index,
                        "id": step.id,
                        "name": step.name,
                        "type": step.type,
                        "estimated_time_minutes": step.estimated_time_minutes,
                    },
                }
            )
        return {"type": "FeatureCollection", "features": features}

    def __repr__(self) -> str:
        status = "found" if self.found else "no route"
        return f"RouteResult({status}, {len(self.steps)} steps, {self.total_minutes:g} min)"
