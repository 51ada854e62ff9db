"""Constraint Filter - Remove edges a route request does not allow.

Applied to the edge set before search, never during it. An edge is excluded
if ANY rule holds:
- It is a lift listed in the request's avoided lifts
- It is a trail whose difficulty rank is strictly above the ceiling's rank

Difficulties missing from DifficultyConfig.RANKS (terrain park, connectors
without a trail) rank UNRANKED and always pass the ceiling test.

Pure: returns a new list, the input edges are not touched.
"""

import logging
from typing import Iterable, Optional

from skiresort_router.constants import DifficultyConfig
from skiresort_router.model.edge import Edge

logger = logging.getLogger(__name__)


def difficulty_rank(difficulty: Optional[str]) -> float:
    """Numeric rank of a difficulty, UNRANKED if not in the table."""
    if difficulty is None:
        return DifficultyConfig.UNRANKED
    return DifficultyConfig.RANKS.get(difficulty, DifficultyConfig.UNRANKED)


def ceiling_rank(max_difficulty: str) -> float:
    """Rank of a difficulty ceiling.

    Raises:
        ValueError: If the ceiling is not in the difficulty table.
    """
    if max_difficulty not in DifficultyConfig.RANKS:
        raise ValueError(
            f"Unknown max difficulty {max_difficulty!r}, expected one of {DifficultyConfig.DIFFICULTIES}"
        )
    return DifficultyConfig.RANKS[max_difficulty]


def is_edge_allowed(edge: Edge, max_rank: float, avoid_lift_ids: frozenset[str]) -> bool:
    """Check one edge against the request constraints."""
    if edge.is_lift and edge.id in avoid_lift_ids:
        return False
    if edge.is_trail and difficulty_rank(difficulty=edge.difficulty) > max_rank:
        return False
    return True


def filter_edges(
    edges: Iterable[Edge],
    max_difficulty: str,
    avoid_lift_ids: Iterable[str] = (),
) -> list[Edge]:
    """Return the edges usable under a difficulty ceiling and lift-avoidance list.

    Args:
        edges: Candidate edges (order is preserved)
        max_difficulty: Difficulty ceiling, a key of DifficultyConfig.RANKS
        avoid_lift_ids: Lift edge IDs to exclude

    Returns:
        New list of allowed edges in input order.

    Raises:
        ValueError: If max_difficulty is unknown.
    """
    max_rank = ceiling_rank(max_difficulty=max_difficulty)
    avoid = frozenset(avoid_lift_ids)

    candidates = list(edges)
    allowed = [edge for edge in candidates if is_edge_allowed(edge=edge, max_rank=max_rank, avoid_lift_ids=avoid)]

    logger.debug(
        f"Constraint filter: kept {len(allowed)}/{len(candidates)} edges "
        f"(max_difficulty={max_difficulty}, avoided lifts={len(avoid)})"
    )
    return allowed
