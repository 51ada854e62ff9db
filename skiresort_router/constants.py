"""Configuration constants for Ski Resort Router.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: Route-finder page settings
    EntityPrefixes: Edge ID prefixes per edge kind
    EdgeTypes: Edge kind tags
    NodeTypes: Point-of-interest categories
    DifficultyConfig: Ordered trail difficulty ranks
    RouteConfig: Edge cost and step reduction parameters
    SearchConfig: Path search parameters
"""

from pathlib import Path

# Package root directory (where skiresort_router/ lives)
PACKAGE_DIR = Path(__file__).parent

# Bundled example resorts shipped with the package
DATA_DIR = PACKAGE_DIR / "data"


class AppConfig:
    """Route-finder page settings."""

    TITLE = "Ski Resort Router - Find Your Way Down"
    ICON = "⛷️"
    LAYOUT = "centered"

    # Graph loaded when no other resort file is given
    SAMPLE_RESORT_PATH = DATA_DIR / "sample_resort.json"


class EntityPrefixes:
    """ID prefixes for graph edges.

    Lifts and trail segments live in separate tables upstream, so their raw
    IDs overlap. Prefixing keeps edge IDs unique within one resort graph.
    """

    LIFT = "lift-"
    SEGMENT = "segment-"

    @staticmethod
    def lift_edge_id(lift_id: int) -> str:
        """Edge ID for a lift record (e.g., 3 -> "lift-3")."""
        return f"{EntityPrefixes.LIFT}{lift_id}"

    @staticmethod
    def segment_edge_id(segment_id: int) -> str:
        """Edge ID for a trail segment record (e.g., 17 -> "segment-17")."""
        return f"{EntityPrefixes.SEGMENT}{segment_id}"


class EdgeTypes:
    """Edge kind tags."""

    LIFT = "lift"
    TRAIL = "trail"
    ALL = (LIFT, TRAIL)


class NodeTypes:
    """Point-of-interest categories.

    Informational only: the type never affects path cost.
    """

    LODGE = "lodge"
    INTERSECTION = "intersection"
    LIFT_TOP = "lift_top"
    LIFT_BOTTOM = "lift_bottom"
    TRAIL_HEAD = "trail_head"
    # Unnamed points that only stitch segments together
    NODE = "node"


class DifficultyConfig:
    """Ordered trail difficulty scale.

    Ranks are compared numerically, never alphabetically. A difficulty that is
    missing from the table (terrain park, connectors without a trail) ranks
    UNRANKED and therefore passes every difficulty ceiling.
    """

    RANKS = {
        "green": 1.0,
        "blue": 2.0,
        "blue-black": 2.5,
        "black": 3.0,
        "double_black": 4.0,
    }
    DIFFICULTIES = list(RANKS.keys())
    UNRANKED = 0.0

    DEFAULT_MAX_DIFFICULTY = "blue"

    LABELS = {
        "green": "🟢 Green Circle",
        "blue": "🔵 Blue Square",
        "blue-black": "🔷 Blue/Black",
        "black": "◆ Black Diamond",
        "double_black": "◆◆ Double Black",
    }
    assert set(LABELS.keys()) == set(DIFFICULTIES)


# Ranks must increase along the table order
assert all(
    DifficultyConfig.RANKS[a] < DifficultyConfig.RANKS[b]
    for a, b in zip(DifficultyConfig.DIFFICULTIES, DifficultyConfig.DIFFICULTIES[1:])
), "Difficulty ranks must be strictly increasing"
assert DifficultyConfig.UNRANKED < min(DifficultyConfig.RANKS.values())


class RouteConfig:
    """Edge cost and route step reduction parameters."""

    # Display name given to trail segments that belong to no trail
    CONNECTOR_NAME = "Connector"

    # Connector steps at or below this many minutes are dropped from the route
    CONNECTOR_SUPPRESSION_MINUTES = 1.0

    # Cost used for edges whose estimated time is missing or zero
    MISSING_COST_MINUTES = 1.0


class SearchConfig:
    """Path search parameters."""

    # Minimum speed bound for the straight-line heuristic.
    # Raised per graph to the fastest speed any edge implies.
    HEURISTIC_MAX_SPEED_KMH = 60.0

    # Frontier pops between deadline checks
    DEADLINE_CHECK_INTERVAL = 64
