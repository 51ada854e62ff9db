"""Path Search Engine - Minimum-time edge sequence between two nodes.

Label-correcting search over a ResortGraph driven by a binary-heap frontier.
With no heuristic it is plain Dijkstra; an admissible heuristic turns it into
A* without changing the result.

Algorithm Overview:
1. cost_so_far = {start: 0}, came_from = {start: None}, frontier = [start @ 0]
2. Pop the cheapest frontier entry; stop as soon as the goal is popped
3. Relax each outgoing edge: record a neighbour when first reached or
   reached strictly cheaper, and push it (duplicates allowed, no decrease-key)
4. Entries whose cost is worse than the recorded cost are skipped at pop time
5. Walk came_from back from the goal and reverse the collected edges

Edge weight is Edge.cost_minutes: missing or zero times count as one minute.

Tie-break: frontier entries carry an insertion counter, so equal priorities pop
first-in first-out, and a node keeps the predecessor that reached it first at
a given cost. Results are deterministic for a given edge order.

Every call allocates its own maps and frontier; nothing is shared.
"""

import heapq
import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from skiresort_router.constants import SearchConfig
from skiresort_router.core.geo_calculator import GeoCalculator
from skiresort_router.model.edge import Edge
from skiresort_router.model.node import Node
from skiresort_router.model.resort_graph import ResortGraph

logger = logging.getLogger(__name__)

# Estimated minutes from a node to the goal. Must never overestimate.
Heuristic = Callable[[int], float]


class SearchDeadlineExceeded(RuntimeError):
    """Raised when a search runs past its caller-supplied deadline."""


@dataclass(frozen=True)
class CameFrom:
    """Predecessor record: the node we came from and the edge we took."""

    prev_id: int
    edge: Edge


def zero_heuristic(node_id: int) -> float:
    """No estimate: the search behaves as Dijkstra."""
    return 0.0


def edge_speed_bound_kmh(graph: ResortGraph, floor_kmh: float) -> Optional[float]:
    """Fastest straight-line speed any edge of the graph implies.

    Each edge covers the distance between its endpoints in cost_minutes, so
    edges with a missing time (costed at one minute) can be far faster than
    any real lift. Returns None if an edge endpoint has no coordinates.
    """
    speed_kmh = floor_kmh
    for edge in graph.edges:
        start = graph.nodes.get(edge.start_point_id)
        end = graph.nodes.get(edge.end_point_id)
        if start is None or end is None:
            return None
        distance_m = start.coords.distance_to(other=end.coords)
        speed_kmh = max(speed_kmh, distance_m / edge.cost_minutes * 60 / 1000)
    return speed_kmh


def straight_line_heuristic(
    graph: ResortGraph,
    end_node_id: int,
    max_speed_kmh: float = SearchConfig.HEURISTIC_MAX_SPEED_KMH,
) -> Heuristic:
    """Build an A* heuristic from straight-line distance to the goal.

    Estimate = haversine distance / speed bound, in minutes. The bound is
    max_speed_kmh raised to the fastest speed any edge implies, so no edge
    is ever travelled faster than the bound and the estimate never exceeds
    the true remaining cost. Falls back to zero_heuristic for an unknown goal
    or when a dangling edge leaves the bound undefined.

    Args:
        graph: Graph the search runs on
        end_node_id: Goal node
        max_speed_kmh: Lower limit for the speed bound

    Returns:
        Callable mapping node ID to estimated minutes.
    """
    goal = graph.nodes.get(end_node_id)
    if goal is None:
        return zero_heuristic

    speed_kmh = edge_speed_bound_kmh(graph=graph, floor_kmh=max_speed_kmh)
    if speed_kmh is None:
        logger.debug("Straight-line heuristic disabled: graph has edges to unknown nodes")
        return zero_heuristic

    def estimate(node_id: int) -> float:
        node = graph.nodes.get(node_id)
        if node is None:
            return 0.0
        distance_m = node.coords.distance_to(other=goal.coords)
        return GeoCalculator.travel_minutes(distance_m=distance_m, speed_kmh=speed_kmh)

    return estimate


def path_cost(edges: Iterable[Edge]) -> float:
    """Total search cost of an edge sequence in minutes."""
    return sum(edge.cost_minutes for edge in edges)


class PathSearch:
    """Shortest-path search over one resort graph.

    Example:
        search = PathSearch(graph=graph)
        edges = search.find_path(start_node_id=1, end_node_id=3)
        if edges is None:
            print("No route")
    """

    def __init__(self, graph: ResortGraph, heuristic: Optional[Heuristic] = None) -> None:
        """Initialize the search.

        Args:
            graph: Graph to search (already filtered for the request)
            heuristic: Optional admissible estimate, defaults to zero (Dijkstra)
        """
        self.graph = graph
        self.heuristic = heuristic or zero_heuristic

    def find_path(
        self,
        start_node_id: int,
        end_node_id: int,
        deadline: Optional[float] = None,
    ) -> Optional[list[Edge]]:
        """Find the minimum-cost edge sequence from start to end.

        Args:
            start_node_id: Node to start from
            end_node_id: Node to reach
            deadline: Optional time.monotonic() value after which to give up

        Returns:
            Ordered edges from start to end, [] if start equals end,
            None if no path exists or either node is not in the graph.

        Raises:
            SearchDeadlineExceeded: If the deadline passes during the search.
        """
        if not self.graph.has_node(start_node_id) or not self.graph.has_node(end_node_id):
            logger.debug(f"Search {start_node_id}->{end_node_id}: endpoint not in graph")
            return None

        if start_node_id == end_node_id:
            return []

        cost_so_far: dict[int, float] = {start_node_id: 0.0}
        came_from: dict[int, Optional[CameFrom]] = {start_node_id: None}

        # Entries: (priority, insertion order, cost when pushed, node id)
        counter = itertools.count()
        frontier: list[tuple[float, int, float, int]] = [
            (self.heuristic(start_node_id), next(counter), 0.0, start_node_id)
        ]

        pops = 0
        while frontier:
            _, _, pushed_cost, current_id = heapq.heappop(frontier)
            pops += 1
            if deadline is not None and (pops - 1) % SearchConfig.DEADLINE_CHECK_INTERVAL == 0:
                if time.monotonic() > deadline:
                    raise SearchDeadlineExceeded(
                        f"Search {start_node_id}->{end_node_id} exceeded deadline after {pops} pops"
                    )

            if current_id == end_node_id:
                break

            current_cost = cost_so_far[current_id]
            if pushed_cost > current_cost:
                continue  # stale entry

            for edge in self.graph.outgoing(current_id):
                next_id = edge.end_point_id
                new_cost = current_cost + edge.cost_minutes
                if next_id not in cost_so_far or new_cost < cost_so_far[next_id]:
                    cost_so_far[next_id] = new_cost
                    came_from[next_id] = CameFrom(prev_id=current_id, edge=edge)
                    priority = new_cost + self.heuristic(next_id)
                    heapq.heappush(frontier, (priority, next(counter), new_cost, next_id))

        logger.debug(f"Search {start_node_id}->{end_node_id}: {pops} pops, {len(cost_so_far)} nodes reached")

        if end_node_id not in came_from:
            return None

        return self._reconstruct(came_from=came_from, start_node_id=start_node_id, end_node_id=end_node_id)

    @staticmethod
    def _reconstruct(
        came_from: dict[int, Optional[CameFrom]],
        start_node_id: int,
        end_node_id: int,
    ) -> list[Edge]:
        """Walk predecessors back from the goal and return edges in travel order."""
        path: list[Edge] = []
        current = end_node_id
        while current != start_node_id:
            step = came_from[current]
            if step is None:
                raise RuntimeError(f"Predecessor chain from {end_node_id} ended at {current}, not {start_node_id}")
            path.append(step.edge)
            current = step.prev_id
        path.reverse()
        return path


def find_shortest_path(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    start_node_id: int,
    end_node_id: int,
    deadline: Optional[float] = None,
) -> Optional[list[Edge]]:
    """Shortest path over flat node and edge lists.

    Builds a fresh ResortGraph and runs a Dijkstra PathSearch on it.
    See PathSearch.find_path for the return contract.
    """
    graph = ResortGraph(nodes=nodes, edges=edges)
    return PathSearch(graph=graph).find_path(
        start_node_id=start_node_id,
        end_node_id=end_node_id,
        deadline=deadline,
    )
