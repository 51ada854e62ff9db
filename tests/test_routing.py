"""Tests for the route engine stages.

Tests: filter_edges, PathSearch / find_shortest_path, reduce_to_steps
Focus: Difficulty ceiling and lift avoidance, optimality and tie-breaks,
       step merging and connector suppression

Note: Fixtures are defined in conftest.py (three-node scenario, sample resort).
"""

import itertools
import time
from dataclasses import replace
from typing import Optional

import numpy as np
import pytest
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from skiresort_router.constants import DifficultyConfig, RouteConfig
from skiresort_router.model.coords import Coords
from skiresort_router.model.edge import Edge
from skiresort_router.model.node import Node
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.model.route_request import RouteRequest
from skiresort_router.routing.constraint_filter import ceiling_rank, difficulty_rank, filter_edges
from skiresort_router.routing.path_reducer import reduce_steps, reduce_to_steps
from skiresort_router.routing.path_search import (
    PathSearch,
    SearchDeadlineExceeded,
    find_shortest_path,
    path_cost,
    straight_line_heuristic,
)
from skiresort_router.routing.route_planner import RoutePlanner


# =============================================================================
# HELPERS
# =============================================================================


def trail(
    edge_id: int,
    start: int,
    end: int,
    minutes: Optional[float],
    name: str = "Run",
    difficulty: Optional[str] = "green",
    trail_id: Optional[int] = 10,
) -> Edge:
    """Trail segment edge with sensible defaults."""
    return Edge(
        id=f"segment-{edge_id}",
        type="trail",
        start_point_id=start,
        end_point_id=end,
        name=name,
        difficulty=difficulty,
        estimated_time_minutes=minutes,
        trail_id=trail_id,
    )


def connector(edge_id: int, start: int, end: int, minutes: Optional[float]) -> Edge:
    return trail(
        edge_id=edge_id,
        start=start,
        end=end,
        minutes=minutes,
        name=RouteConfig.CONNECTOR_NAME,
        difficulty=None,
        trail_id=None,
    )


def lift(edge_id: int, start: int, end: int, minutes: Optional[float], name: str = "Chair") -> Edge:
    return Edge(
        id=f"lift-{edge_id}",
        type="lift",
        start_point_id=start,
        end_point_id=end,
        name=name,
        estimated_time_minutes=minutes,
    )


def line_nodes(count: int) -> list[Node]:
    """Nodes 1..count spaced 1km apart going north from the equator."""
    return [Node(id=i, name=f"P{i}", type="intersection", lat=0.009 * (i - 1), lng=0.0) for i in range(1, count + 1)]


# =============================================================================
# CONSTRAINT FILTER
# =============================================================================


class TestConstraintFilter:
    """filter_edges - difficulty ceiling and lift avoidance."""

    def test_difficulty_ranks_are_numeric(self) -> None:
        """Blue-black sorts between blue and black, not alphabetically."""
        assert difficulty_rank(difficulty="blue") < difficulty_rank(difficulty="blue-black")
        assert difficulty_rank(difficulty="blue-black") < difficulty_rank(difficulty="black")
        assert difficulty_rank(difficulty="terrain_park") == DifficultyConfig.UNRANKED
        assert difficulty_rank(difficulty=None) == DifficultyConfig.UNRANKED

    def test_unknown_ceiling_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown max difficulty"):
            ceiling_rank(max_difficulty="purple")
        with pytest.raises(ValueError):
            filter_edges(edges=[], max_difficulty="extreme")

    def test_trail_above_ceiling_removed(self) -> None:
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=3, difficulty="black"),
            trail(edge_id=2, start=1, end=2, minutes=3, difficulty="blue-black"),
            trail(edge_id=3, start=1, end=2, minutes=3, difficulty="blue"),
        ]
        kept = filter_edges(edges=edges, max_difficulty="blue-black")
        assert [edge.id for edge in kept] == ["segment-2", "segment-3"]

    def test_unranked_trails_always_pass(self) -> None:
        """Terrain park and connectors carry no rank and pass even a green ceiling."""
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=3, difficulty="terrain_park"),
            connector(edge_id=2, start=2, end=3, minutes=1),
        ]
        assert filter_edges(edges=edges, max_difficulty="green") == edges

    def test_lifts_ignore_difficulty(self) -> None:
        chair = replace(lift(edge_id=1, start=1, end=2, minutes=5), difficulty="double_black")
        assert filter_edges(edges=[chair], max_difficulty="green") == [chair]

    def test_avoided_lifts_removed(self, green_trail_then_lift: list[Edge]) -> None:
        kept = filter_edges(edges=green_trail_then_lift, max_difficulty="blue", avoid_lift_ids=["lift-1"])
        assert [edge.id for edge in kept] == ["segment-1"]

    def test_avoid_list_only_applies_to_lifts(self) -> None:
        """A trail whose ID happens to be in the avoid list is kept."""
        run = Edge(id="lift-7", type="trail", start_point_id=1, end_point_id=2, name="Odd", difficulty="green")
        assert filter_edges(edges=[run], max_difficulty="green", avoid_lift_ids=["lift-7"]) == [run]

    def test_filter_is_pure_and_order_preserving(self, sample_graph: ResortGraph) -> None:
        before = list(sample_graph.edges)
        kept = filter_edges(edges=sample_graph.edges, max_difficulty="blue", avoid_lift_ids=["lift-2"])
        assert sample_graph.edges == before
        assert kept is not sample_graph.edges
        positions = [before.index(edge) for edge in kept]
        assert positions == sorted(positions)
        assert "segment-105" not in {edge.id for edge in kept}
        assert "lift-2" not in {edge.id for edge in kept}

    def test_stricter_ceiling_never_returns_more(self, sample_graph: ResortGraph) -> None:
        """Filtering is monotonic along the difficulty scale."""
        for lower, higher in itertools.combinations(DifficultyConfig.DIFFICULTIES, 2):
            strict = {edge.id for edge in filter_edges(edges=sample_graph.edges, max_difficulty=lower)}
            loose = {edge.id for edge in filter_edges(edges=sample_graph.edges, max_difficulty=higher)}
            assert strict <= loose


# =============================================================================
# PATH SEARCH
# =============================================================================


class TestPathSearch:
    """PathSearch - heap-based Dijkstra with lazy deletion."""

    def test_three_node_scenario(self, three_nodes: list[Node], green_trail_then_lift: list[Edge]) -> None:
        """1 -> 2 green trail then 2 -> 3 lift: both edges, 7 minutes."""
        path = find_shortest_path(nodes=three_nodes, edges=green_trail_then_lift, start_node_id=1, end_node_id=3)
        assert path == green_trail_then_lift
        assert path_cost(edges=path) == 7.0

    def test_avoided_lift_leaves_no_route(self, three_nodes: list[Node], green_trail_then_lift: list[Edge]) -> None:
        allowed = filter_edges(edges=green_trail_then_lift, max_difficulty="blue", avoid_lift_ids=["lift-1"])
        assert find_shortest_path(nodes=three_nodes, edges=allowed, start_node_id=1, end_node_id=3) is None

    def test_filtered_black_trail_leaves_no_route(
        self, three_nodes: list[Node], green_trail_then_lift: list[Edge]
    ) -> None:
        edges = [replace(green_trail_then_lift[0], difficulty="black"), green_trail_then_lift[1]]
        allowed = filter_edges(edges=edges, max_difficulty="green")
        assert "segment-1" not in {edge.id for edge in allowed}
        assert find_shortest_path(nodes=three_nodes, edges=allowed, start_node_id=1, end_node_id=3) is None

    def test_same_start_and_end_is_empty_not_none(self, three_node_graph: ResortGraph) -> None:
        search = PathSearch(graph=three_node_graph)
        for node_id in three_node_graph.nodes:
            assert search.find_path(start_node_id=node_id, end_node_id=node_id) == []

    def test_unknown_endpoints_mean_no_route(self, three_node_graph: ResortGraph) -> None:
        search = PathSearch(graph=three_node_graph)
        assert search.find_path(start_node_id=99, end_node_id=3) is None
        assert search.find_path(start_node_id=1, end_node_id=99) is None
        assert search.find_path(start_node_id=99, end_node_id=99) is None

    def test_edges_are_one_way(self, three_node_graph: ResortGraph) -> None:
        assert PathSearch(graph=three_node_graph).find_path(start_node_id=3, end_node_id=1) is None

    def test_cheaper_multi_edge_route_wins(self) -> None:
        edges = [
            trail(edge_id=1, start=1, end=3, minutes=10),
            trail(edge_id=2, start=1, end=2, minutes=3),
            lift(edge_id=3, start=2, end=3, minutes=4),
        ]
        path = find_shortest_path(nodes=line_nodes(count=3), edges=edges, start_node_id=1, end_node_id=3)
        assert [edge.id for edge in path] == ["segment-2", "lift-3"]

    def test_triangle_inequality(self) -> None:
        """Cost A->C never exceeds A->B + B->C when those edges exist."""
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=2),
            trail(edge_id=2, start=2, end=3, minutes=2),
            trail(edge_id=3, start=1, end=3, minutes=5),
        ]
        path = find_shortest_path(nodes=line_nodes(count=3), edges=edges, start_node_id=1, end_node_id=3)
        assert path_cost(edges=path) <= 4.0

    def test_tie_goes_to_first_discovered(self) -> None:
        """Two 2-minute routes 1->2->4 and 1->3->4: edge order decides."""
        a = trail(edge_id=1, start=1, end=2, minutes=1)
        b = trail(edge_id=2, start=1, end=3, minutes=1)
        c = trail(edge_id=3, start=2, end=4, minutes=1)
        d = trail(edge_id=4, start=3, end=4, minutes=1)
        nodes = line_nodes(count=4)

        path = find_shortest_path(nodes=nodes, edges=[a, b, c, d], start_node_id=1, end_node_id=4)
        assert path == [a, c]

        path = find_shortest_path(nodes=nodes, edges=[b, a, d, c], start_node_id=1, end_node_id=4)
        assert path == [b, d]

    def test_improved_node_uses_new_predecessor(self) -> None:
        """Node 2 is first reached at 10 min, then improved to 2 min via node 3."""
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=10),
            trail(edge_id=2, start=1, end=3, minutes=1),
            trail(edge_id=3, start=3, end=2, minutes=1),
            trail(edge_id=4, start=2, end=4, minutes=20),
        ]
        path = find_shortest_path(nodes=line_nodes(count=4), edges=edges, start_node_id=1, end_node_id=4)
        assert [edge.id for edge in path] == ["segment-2", "segment-3", "segment-4"]
        assert path_cost(edges=path) == 22.0

    @pytest.mark.parametrize("minutes", [0.0, None])
    def test_zero_or_missing_time_costs_one_minute(self, minutes: Optional[float]) -> None:
        """Two free-looking hops cost 2 minutes, so a 1.5 minute edge beats them."""
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=minutes),
            trail(edge_id=2, start=2, end=3, minutes=minutes),
            trail(edge_id=3, start=1, end=3, minutes=1.5),
        ]
        path = find_shortest_path(nodes=line_nodes(count=3), edges=edges, start_node_id=1, end_node_id=3)
        assert [edge.id for edge in path] == ["segment-3"]

    def test_dangling_edge_is_traversable(self) -> None:
        """An edge through a node missing from the node list still routes by ID."""
        nodes = line_nodes(count=2)
        edges = [trail(edge_id=1, start=1, end=77, minutes=1), trail(edge_id=2, start=77, end=2, minutes=1)]
        path = find_shortest_path(nodes=nodes, edges=edges, start_node_id=1, end_node_id=2)
        assert [edge.id for edge in path] == ["segment-1", "segment-2"]

    def test_path_is_connected_chain(self, sample_graph: ResortGraph) -> None:
        search = PathSearch(graph=sample_graph)
        for start, end in itertools.permutations(sample_graph.nodes, 2):
            path = search.find_path(start_node_id=start, end_node_id=end)
            assert path, f"sample resort should connect {start} -> {end}"
            assert path[0].start_point_id == start
            assert path[-1].end_point_id == end
            for before, after in zip(path, path[1:]):
                assert before.end_point_id == after.start_point_id

    def test_costs_match_scipy_dijkstra(self, sample_graph: ResortGraph) -> None:
        """Optimal cost for every pair agrees with SciPy's reference Dijkstra."""
        ids = sorted(sample_graph.nodes)
        index = {node_id: i for i, node_id in enumerate(ids)}
        rows = [index[edge.start_point_id] for edge in sample_graph.edges]
        cols = [index[edge.end_point_id] for edge in sample_graph.edges]
        weights = [edge.cost_minutes for edge in sample_graph.edges]
        matrix = csr_matrix((np.array(weights), (rows, cols)), shape=(len(ids), len(ids)))
        expected = dijkstra(csgraph=matrix, directed=True)

        search = PathSearch(graph=sample_graph)
        for start, end in itertools.permutations(ids, 2):
            path = search.find_path(start_node_id=start, end_node_id=end)
            assert path_cost(edges=path) == pytest.approx(expected[index[start], index[end]])

    def test_expired_deadline_raises(self, three_node_graph: ResortGraph) -> None:
        with pytest.raises(SearchDeadlineExceeded):
            PathSearch(graph=three_node_graph).find_path(
                start_node_id=1,
                end_node_id=3,
                deadline=time.monotonic() - 1.0,
            )

    def test_future_deadline_does_not_change_result(self, three_node_graph: ResortGraph) -> None:
        search = PathSearch(graph=three_node_graph)
        with_deadline = search.find_path(start_node_id=1, end_node_id=3, deadline=time.monotonic() + 60.0)
        assert with_deadline == search.find_path(start_node_id=1, end_node_id=3)

    def test_searches_do_not_share_state(self, three_node_graph: ResortGraph) -> None:
        search = PathSearch(graph=three_node_graph)
        first = search.find_path(start_node_id=1, end_node_id=3)
        assert search.find_path(start_node_id=3, end_node_id=1) is None
        assert search.find_path(start_node_id=1, end_node_id=3) == first


class TestStraightLineHeuristic:
    """A* with a straight-line bound finds the same costs as Dijkstra."""

    def test_estimate_is_distance_over_speed(self, three_node_graph: ResortGraph) -> None:
        """Node 1 is ~2km from node 3; at 60 km/h that is ~2 minutes."""
        estimate = straight_line_heuristic(graph=three_node_graph, end_node_id=3)
        assert estimate(1) == pytest.approx(2.0, abs=0.05)
        assert estimate(3) == 0.0
        assert estimate(99) == 0.0

    def test_unknown_goal_gives_zero_estimate(self, three_node_graph: ResortGraph) -> None:
        estimate = straight_line_heuristic(graph=three_node_graph, end_node_id=99)
        assert estimate(1) == 0.0

    def test_untimed_edges_raise_speed_bound(self) -> None:
        """Two untimed hops over 10km cost 2 minutes and must beat a 5 minute lift.

        Node 2 lies 10km north; the goal (3) is 500m north of the start.
        """
        nodes = [
            Node(id=1, name="Start", type="lodge", lat=0.0, lng=0.0),
            Node(id=2, name="Far", type="intersection", lat=0.09, lng=0.0),
            Node(id=3, name="Goal", type="lodge", lat=0.0045, lng=0.0),
        ]
        edges = [
            lift(edge_id=1, start=1, end=3, minutes=5),
            trail(edge_id=1, start=1, end=2, minutes=None),
            trail(edge_id=2, start=2, end=3, minutes=None),
        ]
        graph = ResortGraph(nodes=nodes, edges=edges)
        heuristic = straight_line_heuristic(graph=graph, end_node_id=3)
        assert heuristic(2) <= 1.0

        path = PathSearch(graph=graph, heuristic=heuristic).find_path(start_node_id=1, end_node_id=3)
        assert [edge.id for edge in path] == ["segment-1", "segment-2"]
        assert path_cost(edges=path) == 2.0

    def test_planner_heuristic_matches_plain_search_on_untimed_edges(self) -> None:
        nodes = [
            Node(id=1, name="Start", type="lodge", lat=0.0, lng=0.0),
            Node(id=2, name="Far", type="intersection", lat=0.09, lng=0.0),
            Node(id=3, name="Goal", type="lodge", lat=0.0045, lng=0.0),
        ]
        edges = [
            lift(edge_id=1, start=1, end=3, minutes=5),
            trail(edge_id=1, start=1, end=2, minutes=0.0),
            trail(edge_id=2, start=2, end=3, minutes=0.0),
        ]
        planner = RoutePlanner(graph=ResortGraph(nodes=nodes, edges=edges))
        request = RouteRequest(ski_area_id=1, start_point_id=1, end_point_id=3, max_difficulty="blue")
        plain = planner.plan(request=request)
        guided = planner.plan(request=request, use_heuristic=True)
        assert guided.total_minutes == plain.total_minutes == 2.0

    def test_dangling_edge_disables_estimate(self) -> None:
        edges = [trail(edge_id=1, start=1, end=77, minutes=1), trail(edge_id=2, start=77, end=2, minutes=1)]
        graph = ResortGraph(nodes=line_nodes(count=2), edges=edges)
        estimate = straight_line_heuristic(graph=graph, end_node_id=2)
        assert estimate(1) == 0.0

    def test_same_costs_as_dijkstra(self, sample_graph: ResortGraph) -> None:
        dijkstra_search = PathSearch(graph=sample_graph)
        for start, end in itertools.permutations(sample_graph.nodes, 2):
            heuristic = straight_line_heuristic(graph=sample_graph, end_node_id=end)
            astar = PathSearch(graph=sample_graph, heuristic=heuristic)
            expected = dijkstra_search.find_path(start_node_id=start, end_node_id=end)
            actual = astar.find_path(start_node_id=start, end_node_id=end)
            assert path_cost(edges=actual) == pytest.approx(path_cost(edges=expected))


# =============================================================================
# PATH REDUCER
# =============================================================================


class TestPathReducer:
    """reduce_to_steps - merging and connector suppression."""

    def test_merges_consecutive_trail_segments(self) -> None:
        """Trestle 5 + Trestle 4 + LiftA 8 -> Trestle 9, LiftA 8."""
        nodes = {node.id: node for node in line_nodes(count=4)}
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=5, name="Trestle"),
            trail(edge_id=2, start=2, end=3, minutes=4, name="Trestle"),
            lift(edge_id=3, start=3, end=4, minutes=8, name="LiftA"),
        ]
        steps = reduce_to_steps(edges=edges, nodes=nodes)
        assert [(s.name, s.estimated_time_minutes, s.type) for s in steps] == [
            ("Trestle", 9.0, "trail"),
            ("LiftA", 8.0, "lift"),
        ]
        trestle = steps[0]
        assert trestle.id == "segment-1"
        assert trestle.start_coords == nodes[1].coords
        assert trestle.end_coords == nodes[3].coords

    def test_lifts_with_same_name_not_merged(self) -> None:
        nodes = {node.id: node for node in line_nodes(count=3)}
        edges = [lift(edge_id=1, start=1, end=2, minutes=3), lift(edge_id=2, start=2, end=3, minutes=3)]
        assert len(reduce_to_steps(edges=edges, nodes=nodes)) == 2

    def test_non_consecutive_runs_stay_separate(self) -> None:
        nodes = {node.id: node for node in line_nodes(count=4)}
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=2, name="Trestle"),
            trail(edge_id=2, start=2, end=3, minutes=2, name="Easy Street"),
            trail(edge_id=3, start=3, end=4, minutes=2, name="Trestle"),
        ]
        names = [step.name for step in reduce_to_steps(edges=edges, nodes=nodes)]
        assert names == ["Trestle", "Easy Street", "Trestle"]

    @pytest.mark.parametrize(
        "minutes,kept",
        [(0.5, False), (1.0, False), (None, False), (1.5, True), (5.0, True)],
    )
    def test_connector_suppression_threshold(self, minutes: Optional[float], kept: bool) -> None:
        nodes = {node.id: node for node in line_nodes(count=3)}
        edges = [
            lift(edge_id=1, start=1, end=2, minutes=4),
            connector(edge_id=2, start=2, end=3, minutes=minutes),
        ]
        names = [step.name for step in reduce_to_steps(edges=edges, nodes=nodes)]
        assert (RouteConfig.CONNECTOR_NAME in names) is kept

    def test_short_lift_never_suppressed(self) -> None:
        """A one minute lift stays in the steps even if it is called "Connector"."""
        nodes = {node.id: node for node in line_nodes(count=3)}
        edges = [
            lift(edge_id=1, start=1, end=2, minutes=1, name=RouteConfig.CONNECTOR_NAME),
            lift(edge_id=2, start=2, end=3, minutes=0.5, name="Platter"),
        ]
        steps = reduce_to_steps(edges=edges, nodes=nodes)
        assert [(step.name, step.type) for step in steps] == [("Connector", "lift"), ("Platter", "lift")]

    def test_custom_threshold(self) -> None:
        nodes = {node.id: node for node in line_nodes(count=2)}
        edges = [connector(edge_id=1, start=1, end=2, minutes=0.5)]
        assert reduce_to_steps(edges=edges, nodes=nodes, connector_threshold_minutes=0.0)[0].name == "Connector"

    def test_consecutive_connectors_judged_by_merged_time(self) -> None:
        """0.5 + 0.8 minute connectors merge to 1.3 minutes and are kept."""
        nodes = {node.id: node for node in line_nodes(count=3)}
        edges = [connector(edge_id=1, start=1, end=2, minutes=0.5), connector(edge_id=2, start=2, end=3, minutes=0.8)]
        steps = reduce_to_steps(edges=edges, nodes=nodes)
        assert len(steps) == 1
        assert steps[0].estimated_time_minutes == pytest.approx(1.3)

    def test_trail_rejoins_across_dropped_connector(self) -> None:
        nodes = {node.id: node for node in line_nodes(count=4)}
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=3, name="Trestle"),
            connector(edge_id=2, start=2, end=3, minutes=0.5),
            trail(edge_id=3, start=3, end=4, minutes=2, name="Trestle"),
        ]
        steps = reduce_to_steps(edges=edges, nodes=nodes)
        assert [(s.name, s.estimated_time_minutes) for s in steps] == [("Trestle", 5.0)]
        assert steps[0].end_coords == nodes[4].coords

    def test_reduce_is_idempotent(self, sample_graph: ResortGraph) -> None:
        search = PathSearch(graph=sample_graph)
        for start, end in itertools.permutations(sample_graph.nodes, 2):
            path = search.find_path(start_node_id=start, end_node_id=end)
            steps = reduce_to_steps(edges=path, nodes=sample_graph.nodes)
            assert reduce_steps(steps=steps) == steps

    def test_idempotent_with_rejoined_trail(self) -> None:
        nodes = {node.id: node for node in line_nodes(count=4)}
        edges = [
            trail(edge_id=1, start=1, end=2, minutes=3, name="Trestle"),
            connector(edge_id=2, start=2, end=3, minutes=0.5),
            trail(edge_id=3, start=3, end=4, minutes=2, name="Trestle"),
        ]
        steps = reduce_to_steps(edges=edges, nodes=nodes)
        assert reduce_steps(steps=steps) == steps

    def test_empty_path_gives_no_steps(self) -> None:
        assert reduce_to_steps(edges=[], nodes={}) == []

    def test_missing_node_coords_fall_back_to_origin(self) -> None:
        steps = reduce_to_steps(edges=[lift(edge_id=1, start=5, end=6, minutes=3)], nodes={})
        assert steps[0].start_coords == Coords.origin()
        assert steps[0].end_coords == Coords.origin()

    def test_step_time_is_raw_not_search_cost(self) -> None:
        """A lift with unknown time shows 0 minutes even though search counted 1."""
        nodes = {node.id: node for node in line_nodes(count=2)}
        steps = reduce_to_steps(edges=[lift(edge_id=1, start=1, end=2, minutes=None)], nodes=nodes)
        assert steps[0].estimated_time_minutes == 0.0
