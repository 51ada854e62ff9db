"""Shared pytest fixtures for skiresort_router tests.

Provides small hand-built resort graphs with documented topology plus the
bundled sample resort. All edge times are in minutes.

COORDINATE SYSTEM:
    Hand-built graphs use coordinates near the equator (lat~0, lng~0) where
    1 degree ≈ 111,320 meters. Coordinates never affect routing cost.
"""

import pytest

from skiresort_router.constants import AppConfig
from skiresort_router.model.edge import Edge
from skiresort_router.model.node import Node
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.routing.route_planner import RoutePlanner


# =============================================================================
# THREE-NODE SCENARIO
# =============================================================================


@pytest.fixture
def three_nodes() -> list[Node]:
    """Nodes 1 (base), 2 (mid), 3 (top), 1km apart going north."""
    return [
        Node(id=1, name="Base", type="lodge", lat=0.000, lng=0.0),
        Node(id=2, name="Mid", type="intersection", lat=0.009, lng=0.0),
        Node(id=3, name="Top", type="lift_top", lat=0.018, lng=0.0),
    ]


@pytest.fixture
def green_trail_then_lift() -> list[Edge]:
    """1 -> 2 green trail (3 min), 2 -> 3 lift (4 min). Only way from 1 to 3."""
    return [
        Edge(
            id="segment-1",
            type="trail",
            start_point_id=1,
            end_point_id=2,
            name="Meadow",
            difficulty="green",
            estimated_time_minutes=3.0,
            trail_id=10,
        ),
        Edge(
            id="lift-1",
            type="lift",
            start_point_id=2,
            end_point_id=3,
            name="Mid Chair",
            estimated_time_minutes=4.0,
        ),
    ]


@pytest.fixture
def three_node_graph(three_nodes: list[Node], green_trail_then_lift: list[Edge]) -> ResortGraph:
    """Graph of the three-node scenario."""
    return ResortGraph(nodes=three_nodes, edges=green_trail_then_lift)


# =============================================================================
# SAMPLE RESORT
# =============================================================================


@pytest.fixture
def sample_graph() -> ResortGraph:
    """Bundled Eagle Peak sample resort (8 points, 3 lifts, 10 segments).

    Topology (edge: start -> end, minutes):
    - lift-1 Eagle Express 1 -> 2 (8), lift-2 Summit Chair 5 -> 6 (10),
      lift-3 Cafe Connector Quad 1 -> 5 (12)
    - Trestle (blue): 2 -> 3 (4), 3 -> 4 (3), 4 -> 1 (5)
    - Easy Street (green): 2 -> 8 (6), 6 -> 5 (12), 5 -> 1 (9)
    - Widowmaker (double_black): 6 -> 3 (5)
    - Park Lane (terrain_park, unranked): 6 -> 7 (4)
    - Connectors: 8 -> 5 (0.5), 7 -> 5 (2, requires hike)
    Points 3 and 8 are unnamed "node" points.
    """
    return ResortGraph.load_json(path=AppConfig.SAMPLE_RESORT_PATH)


@pytest.fixture
def sample_planner(sample_graph: ResortGraph) -> RoutePlanner:
    """Planner over the sample resort with the default connector threshold."""
    return RoutePlanner(graph=sample_graph)
