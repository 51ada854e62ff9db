"""ResortGraph - In-memory routing graph for one ski area.

Built fresh for every routing request from records fetched by the storage
layer, then discarded. Holds no state shared between requests.

Provides:
- O(1) lookup of the outgoing edges of a node
- Node lookups with a (0, 0) coordinate fallback for display
- Construction from raw table rows (points, lifts, trails, segments)
- Serialization of the {nodes, edges} graph payload
- Point-of-interest listing and name/alias search for the route form
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from skiresort_router.constants import EdgeTypes, EntityPrefixes, RouteConfig
from skiresort_router.model.coords import Coords
from skiresort_router.model.edge import Edge
from skiresort_router.model.node import Node

logger = logging.getLogger(__name__)


class ResortGraph:
    """Directed graph of points of interest, lifts and trail segments.

    Edges are kept in input order and indexed by their start node. Edges whose
    endpoints are missing from the node list are still indexed: search only
    needs IDs, and coordinates fall back to (0, 0).

    Example:
        graph = ResortGraph(nodes=nodes, edges=edges)
        for edge in graph.outgoing(node_id=1):
            print(edge.name)
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Index nodes by ID and edges by start node.

        Raises:
            ValueError: If two nodes or two edges share an ID.
        """
        self.nodes: dict[int, Node] = {}
        for node in nodes:
            if node.id in self.nodes:
                raise ValueError(f"Duplicate node id {node.id}")
            self.nodes[node.id] = node

        self.edges: list[Edge] = list(edges)
        self._outgoing: dict[int, list[Edge]] = {node_id: [] for node_id in self.nodes}
        seen_edge_ids: set[str] = set()
        for edge in self.edges:
            if edge.id in seen_edge_ids:
                raise ValueError(f"Duplicate edge id {edge.id}")
            seen_edge_ids.add(edge.id)
            self._outgoing.setdefault(edge.start_point_id, []).append(edge)
            self._outgoing.setdefault(edge.end_point_id, [])

    # =========================================================================
    # Lookups
    # =========================================================================

    def outgoing(self, node_id: int) -> list[Edge]:
        """Edges leaving a node, in input order.

        Args:
            node_id: A node ID or an endpoint ID referenced by some edge

        Returns:
            Possibly empty list of edges.

        Raises:
            KeyError: If the ID is neither a node nor an edge endpoint.
        """
        return self._outgoing[node_id]

    def has_node(self, node_id: int) -> bool:
        """True if the ID is in the node list."""
        return node_id in self.nodes

    def get_node(self, node_id: int) -> Node:
        """Return node by ID.

        Raises:
            KeyError: If node not found.
        """
        return self.nodes[node_id]

    def coords_of(self, node_id: int) -> Coords:
        """Position of a node, (0, 0) if the node is unknown."""
        node = self.nodes.get(node_id)
        if node is None:
            return Coords.origin()
        return node.coords

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """Find an edge by ID, None if absent."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def lifts(self) -> list[Edge]:
        """All lift edges, in input order."""
        return [edge for edge in self.edges if edge.is_lift]

    def dangling_edges(self) -> list[Edge]:
        """Edges with at least one endpoint missing from the node list."""
        return [
            edge
            for edge in self.edges
            if edge.start_point_id not in self.nodes or edge.end_point_id not in self.nodes
        ]

    def points_of_interest(self) -> list[Node]:
        """Nodes users can pick as start or end, sorted by display name."""
        return sorted(
            (node for node in self.nodes.values() if node.is_point_of_interest),
            key=lambda node: (node.display_name.lower(), node.id),
        )

    def search_points(self, query: str) -> list[Node]:
        """Points of interest whose name or aliases contain the query."""
        return [node for node in self.points_of_interest() if node.matches(query=query)]

    def with_edges(self, edges: Iterable[Edge]) -> "ResortGraph":
        """New graph over the same nodes with a different edge set."""
        return ResortGraph(nodes=self.nodes.values(), edges=edges)

    # =========================================================================
    # Construction from storage records
    # =========================================================================

    @classmethod
    def from_records(
        cls,
        points: Iterable[dict[str, Any]],
        lifts: Iterable[dict[str, Any]],
        trails: Iterable[dict[str, Any]],
        segments: Iterable[dict[str, Any]],
    ) -> "ResortGraph":
        """Build the routing graph from raw table rows.

        Lifts become "lift" edges named after the lift. Segments become
        "trail" edges carrying their trail's name and difficulty. Segments
        without a trail become connector edges named RouteConfig.CONNECTOR_NAME.
        Edge order is all lifts, then all segments, each in row order.

        Args:
            points: Point-of-interest rows (id, name, type, latitude, longitude, aliases)
            lifts: Lift rows (id, name, start_point_id, end_point_id, estimated_time_minutes)
            trails: Trail rows (id, name, difficulty)
            segments: Segment rows (id, trail_id, start_point_id, end_point_id,
                estimated_time_minutes, requires_hike)

        Raises:
            ValueError: If a lift has no name or a segment references a trail
                that is not in trails.
        """
        nodes = [Node.from_record(row=row) for row in points]
        trails_by_id = {int(row["id"]): row for row in trails}

        edges: list[Edge] = []
        for row in lifts:
            if not row.get("name"):
                raise ValueError(f"Lift {row['id']} has no name")
            edges.append(
                Edge(
                    id=EntityPrefixes.lift_edge_id(lift_id=int(row["id"])),
                    type=EdgeTypes.LIFT,
                    start_point_id=int(row["start_point_id"]),
                    end_point_id=int(row["end_point_id"]),
                    name=row["name"],
                    estimated_time_minutes=_optional_float(row.get("estimated_time_minutes")),
                )
            )

        for row in segments:
            trail_id = row.get("trail_id")
            if trail_id is None:
                name = RouteConfig.CONNECTOR_NAME
                difficulty = None
            else:
                trail_id = int(trail_id)
                trail = trails_by_id.get(trail_id)
                if trail is None:
                    raise ValueError(f"Segment {row['id']} references unknown trail {trail_id}")
                name = trail["name"]
                difficulty = trail.get("difficulty")

            edges.append(
                Edge(
                    id=EntityPrefixes.segment_edge_id(segment_id=int(row["id"])),
                    type=EdgeTypes.TRAIL,
                    start_point_id=int(row["start_point_id"]),
                    end_point_id=int(row["end_point_id"]),
                    name=name,
                    difficulty=difficulty,
                    estimated_time_minutes=_optional_float(row.get("estimated_time_minutes")),
                    requires_hike=bool(row.get("requires_hike", False)),
                    trail_id=trail_id,
                )
            )

        graph = cls(nodes=nodes, edges=edges)
        logger.info(f"Resort graph built: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return graph

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize graph to the JSON-compatible {nodes, edges} payload."""
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResortGraph":
        """Deserialize graph from the {nodes, edges} payload."""
        return cls(
            nodes=[Node.from_dict(data=node_data) for node_data in data["nodes"]],
            edges=[Edge.from_dict(data=edge_data) for edge_data in data["edges"]],
        )

    @classmethod
    def load_json(cls, path: Path | str) -> "ResortGraph":
        """Load a graph payload from a JSON file.

        Accepts either the {nodes, edges} payload or a raw table export
        with points/lifts/trails/segments keys.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if "points" in data:
            return cls.from_records(
                points=data["points"],
                lifts=data.get("lifts", []),
                trails=data.get("trails", []),
                segments=data.get("segments", []),
            )
        return cls.from_dict(data=data)

    def __repr__(self) -> str:
        return f"ResortGraph({len(self.nodes)} nodes, {len(self.edges)} edges)"


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)
