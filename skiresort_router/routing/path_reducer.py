"""Path Reducer - Turn a raw edge sequence into display-ready route steps.

Trail segments are stored one per intersection, so a search result reads like
"Trestle 1 min, Trestle 1 min, Trestle 2 min, ...". Skiers want
"ski Trestle for 4 minutes". The reducer:

1. Builds one candidate step per edge with resolved start/end coordinates
   ((0, 0) when a node cannot be resolved)
2. Merges consecutive trail steps with exactly equal names, summing time and
   taking the end coordinates of the later step
3. Drops connector steps whose merged time is at or below the threshold
4. Merges again, so trail steps separated only by a dropped connector join up

Step times use the edge's raw estimated time (missing counts as 0), not the
search weight, so short connectors stay short enough to be suppressed.

Output order always follows the edge order.
"""

import logging
from typing import Iterable, Mapping

from skiresort_router.constants import EdgeTypes, RouteConfig
from skiresort_router.model.coords import Coords
from skiresort_router.model.edge import Edge
from skiresort_router.model.node import Node
from skiresort_router.model.route_step import RouteStep

logger = logging.getLogger(__name__)


def _coords(nodes: Mapping[int, Node], node_id: int) -> Coords:
    node = nodes.get(node_id)
    if node is None:
        return Coords.origin()
    return node.coords


def edge_to_step(edge: Edge, nodes: Mapping[int, Node]) -> RouteStep:
    """Candidate step for a single edge."""
    return RouteStep(
        id=edge.id,
        name=edge.name,
        type=edge.type,
        estimated_time_minutes=edge.time_minutes,
        start_coords=_coords(nodes=nodes, node_id=edge.start_point_id),
        end_coords=_coords(nodes=nodes, node_id=edge.end_point_id),
    )


def can_merge(current: RouteStep, candidate: RouteStep) -> bool:
    """Both steps are trail steps with exactly the same name."""
    return current.type == EdgeTypes.TRAIL and candidate.type == EdgeTypes.TRAIL and current.name == candidate.name


def merge_steps(steps: Iterable[RouteStep]) -> list[RouteStep]:
    """Single left-to-right pass merging consecutive same-trail steps."""
    merged: list[RouteStep] = []
    current = None
    for candidate in steps:
        if current is not None and can_merge(current=current, candidate=candidate):
            current = current.merged_with(other=candidate)
        else:
            if current is not None:
                merged.append(current)
            current = candidate
    if current is not None:
        merged.append(current)
    return merged


def is_suppressed_connector(step: RouteStep, threshold_minutes: float) -> bool:
    """Trail connector step short enough to be noise. Lifts are never suppressed."""
    return (
        step.type == EdgeTypes.TRAIL
        and step.name == RouteConfig.CONNECTOR_NAME
        and step.estimated_time_minutes <= threshold_minutes
    )


def reduce_steps(
    steps: Iterable[RouteStep],
    connector_threshold_minutes: float = RouteConfig.CONNECTOR_SUPPRESSION_MINUTES,
) -> list[RouteStep]:
    """Merge, suppress short connectors, and merge across the gaps.

    Idempotent: reducing an already reduced list returns it unchanged.
    """
    merged = merge_steps(steps=steps)
    kept = [
        step
        for step in merged
        if not is_suppressed_connector(step=step, threshold_minutes=connector_threshold_minutes)
    ]
    return merge_steps(steps=kept)


def reduce_to_steps(
    edges: Iterable[Edge],
    nodes: Mapping[int, Node],
    connector_threshold_minutes: float = RouteConfig.CONNECTOR_SUPPRESSION_MINUTES,
) -> list[RouteStep]:
    """Reduce a search result to route steps.

    Args:
        edges: Edge sequence in travel order
        nodes: Node lookup by ID for coordinates
        connector_threshold_minutes: Connector steps at or below this are dropped

    Returns:
        Ordered route steps. Empty for an empty edge sequence.
    """
    candidates = [edge_to_step(edge=edge, nodes=nodes) for edge in edges]
    steps = reduce_steps(steps=candidates, connector_threshold_minutes=connector_threshold_minutes)
    logger.debug(f"Path reducer: {len(candidates)} edges -> {len(steps)} steps")
    return steps
