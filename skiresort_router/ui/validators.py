"""Validators - Input validation for route requests.

The routing engine assumes validated input. These checks run first, in the
calling layer, and mirror what the public route endpoint rejects.

Validators return Optional[Message]:
- None if valid
- A Message object if invalid (caller displays it or returns it as a 400)
"""

from typing import Any, Iterable

from skiresort_router.constants import DifficultyConfig
from skiresort_router.model.message import (
    InvalidParameterMessage,
    Message,
    MissingParameterMessage,
    UnknownDifficultyMessage,
    UnknownLiftMessage,
    UnknownPointMessage,
)
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.model.route_request import normalize_lift_id

REQUIRED_PARAMETERS = ("ski_area_id", "start_point_id", "end_point_id", "max_difficulty")
NUMERIC_PARAMETERS = ("ski_area_id", "start_point_id", "end_point_id")


def validate_required_parameters(payload: dict[str, Any]) -> Message | None:
    """Validate that every required parameter is present and non-empty.

    None, the empty string and 0 all count as missing, as on the public route
    endpoint. Resort and point IDs start at 1.

    Returns:
        None if valid, MissingParameterMessage for the first missing one.
    """
    for parameter in REQUIRED_PARAMETERS:
        value = payload.get(parameter)
        if value is None or value == "" or (not isinstance(value, bool) and value == 0):
            return MissingParameterMessage(parameter=parameter)
    return None


def validate_numeric_parameters(payload: dict[str, Any]) -> Message | None:
    """Validate that ID parameters are integers (or integer strings).

    Floats pass only when integral; inf and nan are rejected.

    Returns:
        None if valid, InvalidParameterMessage for the first bad one.
    """
    for parameter in NUMERIC_PARAMETERS:
        value = payload.get(parameter)
        if isinstance(value, bool):
            return InvalidParameterMessage(parameter=parameter, value=str(value))
        try:
            as_int = int(value)
        except (TypeError, ValueError, OverflowError):
            return InvalidParameterMessage(parameter=parameter, value=str(value))
        if isinstance(value, float) and value != as_int:
            return InvalidParameterMessage(parameter=parameter, value=str(value))
    return None


def validate_point_exists(graph: ResortGraph, point_id: int, role: str) -> Message | None:
    """Validate that a point belongs to the resort graph.

    Returns:
        None if valid, UnknownPointMessage otherwise.
    """
    if not graph.has_node(point_id):
        return UnknownPointMessage(point_id=point_id, role=role)
    return None


def validate_max_difficulty(max_difficulty: str) -> Message | None:
    """Validate that the ceiling is on the difficulty scale.

    Returns:
        None if valid, UnknownDifficultyMessage otherwise.
    """
    if max_difficulty not in DifficultyConfig.RANKS:
        return UnknownDifficultyMessage(difficulty=str(max_difficulty))
    return None


def validate_avoid_lifts(graph: ResortGraph, lift_ids: Iterable[int | str]) -> Message | None:
    """Validate that every avoided lift exists in the resort.

    Accepts raw lift IDs (3) and lift edge IDs ("lift-3").

    Returns:
        None if valid, UnknownLiftMessage listing the unknown ones.
    """
    known = {edge.id for edge in graph.lifts()}
    unknown = []
    for lift_id in lift_ids:
        try:
            edge_id = normalize_lift_id(lift_id=lift_id)
        except ValueError:
            unknown.append(str(lift_id))
            continue
        if edge_id not in known:
            unknown.append(edge_id)
    if unknown:
        return UnknownLiftMessage(lift_ids=tuple(unknown))
    return None


def validate_route_payload(payload: dict[str, Any], graph: ResortGraph) -> Message | None:
    """Run all route request checks in order, returning the first failure.

    Returns:
        None if the payload can be turned into a RouteRequest, else a Message.
    """
    message = validate_required_parameters(payload=payload)
    if message is not None:
        return message

    message = validate_numeric_parameters(payload=payload)
    if message is not None:
        return message

    message = validate_max_difficulty(max_difficulty=payload["max_difficulty"])
    if message is not None:
        return message

    for parameter, role in (("start_point_id", "start"), ("end_point_id", "end")):
        message = validate_point_exists(graph=graph, point_id=int(payload[parameter]), role=role)
        if message is not None:
            return message

    return validate_avoid_lifts(graph=graph, lift_ids=payload.get("avoid_lifts") or ())
