"""RoutePlanner - Answer one routing request end to end.

Pipeline: Constraint Filter -> Path Search -> Path Reducer.

The planner owns nothing mutable between calls: each plan() filters into a
new edge list, searches a new graph view, and builds a new result.
"""

import logging
from typing import Optional

from skiresort_router.constants import RouteConfig
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.model.route_request import RouteRequest
from skiresort_router.model.route_result import RouteResult
from skiresort_router.routing.constraint_filter import filter_edges
from skiresort_router.routing.path_reducer import reduce_to_steps
from skiresort_router.routing.path_search import PathSearch, straight_line_heuristic

logger = logging.getLogger(__name__)


class RoutePlanner:
    """Route planning for one resort graph snapshot.

    Example:
        planner = RoutePlanner(graph=ResortGraph.load_json("resort.json"))
        result = planner.plan(request=RouteRequest.from_dict(payload))
        if not result.found:
            print("No route found")
    """

    def __init__(
        self,
        graph: ResortGraph,
        connector_threshold_minutes: float = RouteConfig.CONNECTOR_SUPPRESSION_MINUTES,
    ) -> None:
        """Initialize the planner.

        Args:
            graph: Full resort graph (all lifts and segments)
            connector_threshold_minutes: Connector steps at or below this are dropped
        """
        self.graph = graph
        self.connector_threshold_minutes = connector_threshold_minutes

    def plan(
        self,
        request: RouteRequest,
        deadline: Optional[float] = None,
        use_heuristic: bool = False,
    ) -> RouteResult:
        """Plan the fastest route allowed by the request.

        Args:
            request: Validated route request
            deadline: Optional time.monotonic() value after which the search gives up
            use_heuristic: Guide the search with the straight-line A* heuristic

        Returns:
            RouteResult. result.found is False when no route exists.

        Raises:
            ValueError: If the request's max difficulty is unknown.
            SearchDeadlineExceeded: If the deadline passes during the search.
        """
        allowed = filter_edges(
            edges=self.graph.edges,
            max_difficulty=request.max_difficulty,
            avoid_lift_ids=request.avoid_lifts,
        )
        search_graph = self.graph.with_edges(edges=allowed)

        heuristic = None
        if use_heuristic:
            heuristic = straight_line_heuristic(graph=search_graph, end_node_id=request.end_point_id)

        edges = PathSearch(graph=search_graph, heuristic=heuristic).find_path(
            start_node_id=request.start_point_id,
            end_node_id=request.end_point_id,
            deadline=deadline,
        )

        if edges is None:
            logger.info(
                f"No route in ski area {request.ski_area_id} from {request.start_point_id} "
                f"to {request.end_point_id} (max_difficulty={request.max_difficulty})"
            )
            return RouteResult(request=request, edges=None)

        steps = reduce_to_steps(
            edges=edges,
            nodes=self.graph.nodes,
            connector_threshold_minutes=self.connector_threshold_minutes,
        )
        result = RouteResult(request=request, edges=edges, steps=steps)
        logger.info(
            f"Route found in ski area {request.ski_area_id}: {request.start_point_id} -> "
            f"{request.end_point_id}, {len(edges)} edges, {len(steps)} steps, {result.total_minutes:g} min"
        )
        return result
