"""Route engine: filter -> search -> reduce.

- filter_edges: Drop edges above the difficulty ceiling or on avoided lifts
- PathSearch / find_shortest_path: Heap-based Dijkstra (optional A*)
- reduce_to_steps: Merge same-trail segments, suppress short connectors
- RoutePlanner: The three stages for one RouteRequest
"""

from skiresort_router.routing.constraint_filter import difficulty_rank, filter_edges
from skiresort_router.routing.path_reducer import reduce_steps, reduce_to_steps
from skiresort_router.routing.path_search import (
    PathSearch,
    SearchDeadlineExceeded,
    find_shortest_path,
    straight_line_heuristic,
)
from skiresort_router.routing.route_planner import RoutePlanner

__all__ = [
    "difficulty_rank",
    "filter_edges",
    "PathSearch",
    "SearchDeadlineExceeded",
    "find_shortest_path",
    "straight_line_heuristic",
    "reduce_steps",
    "reduce_to_steps",
    "RoutePlanner",
]
