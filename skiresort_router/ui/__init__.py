"""Calling-layer pieces: request validation and the route-finder page.

The Streamlit page lives in ui/app.py and is not imported here, so the
validators can be used without starting a Streamlit session.
"""

from skiresort_router.ui.validators import (
    validate_avoid_lifts,
    validate_max_difficulty,
    validate_numeric_parameters,
    validate_point_exists,
    validate_required_parameters,
    validate_route_payload,
)

__all__ = [
    "validate_required_parameters",
    "validate_numeric_parameters",
    "validate_max_difficulty",
    "validate_point_exists",
    "validate_avoid_lifts",
    "validate_route_payload",
]
