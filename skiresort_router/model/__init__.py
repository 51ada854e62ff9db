"""Data model classes for resort routing.

Topology is separate from geometry:
- Coords: Geometry atom (lat, lng)
- Node: Point of interest (ID, name, type, position)
- Edge: Directed lift or trail segment between node IDs
- ResortGraph: Nodes plus edges indexed by start node
- RouteRequest: A routing query
- RouteStep: One reduced route instruction
- RouteResult: Outcome of planning a request
- Message: User-facing validation and result messages
"""

from skiresort_router.model.coords import Coords
from skiresort_router.model.edge import Edge
from skiresort_router.model.message import Message, MessageLevel
from skiresort_router.model.node import Node
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.model.route_request import RouteRequest
from skiresort_router.model.route_result import RouteResult
from skiresort_router.model.route_step import RouteStep

__all__ = [
    "Coords",
    "Node",
    "Edge",
    "ResortGraph",
    "RouteRequest",
    "RouteStep",
    "RouteResult",
    "Message",
    "MessageLevel",
]
