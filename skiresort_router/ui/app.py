"""Ski Resort Router - Route finder page.

Pick a start and destination, a difficulty ceiling and lifts to skip;
get the fastest route as a short list of lift and trail steps.

Run: streamlit run skiresort_router/ui/app.py
"""

import logging
from pathlib import Path

import streamlit as st

from skiresort_router.constants import AppConfig, DifficultyConfig, EdgeTypes
from skiresort_router.model.message import NoRouteMessage, TrivialRouteMessage
from skiresort_router.model.resort_graph import ResortGraph
from skiresort_router.model.route_request import RouteRequest
from skiresort_router.model.route_result import RouteResult
from skiresort_router.routing.route_planner import RoutePlanner
from skiresort_router.ui.validators import validate_route_payload

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SKI_AREA_ID = 1


def load_graph(path: Path = AppConfig.SAMPLE_RESORT_PATH) -> ResortGraph:
    """Load the resort graph for this run. Rebuilt every rerun, never shared."""
    return ResortGraph.load_json(path=path)


def render_route(result: RouteResult) -> None:
    """List route steps with time and straight-line distance."""
    if not result.steps:
        st.info("Route calculation complete, but no displayable steps found.")
        return
    st.subheader(f"Your route: {result.total_minutes:g} min, {len(result.steps)} steps")
    for number, step in enumerate(result.steps, start=1):
        icon = "🚡" if step.type == EdgeTypes.LIFT else "⛷️"
        verb = "Ride" if step.type == EdgeTypes.LIFT else "Ski"
        st.markdown(
            f"**{number}. {icon} {verb} {step.name}** - "
            f"{step.estimated_time_minutes:g} min, {step.distance_m:.0f} m, heading {step.bearing_deg:.0f}°"
        )


def main() -> None:
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    st.title(AppConfig.TITLE)

    graph = load_graph()
    points = graph.points_of_interest()
    if not points:
        st.error("This resort has no points of interest yet.")
        return

    labels = {node.id: node.display_name for node in points}
    point_ids = [node.id for node in points]

    start_id = st.selectbox("Start", options=point_ids, format_func=lambda pid: labels[pid], key="start")
    end_id = st.selectbox(
        "Destination",
        options=point_ids,
        index=min(1, len(point_ids) - 1),
        format_func=lambda pid: labels[pid],
        key="end",
    )
    max_difficulty = st.selectbox(
        "Max difficulty",
        options=DifficultyConfig.DIFFICULTIES,
        index=DifficultyConfig.DIFFICULTIES.index(DifficultyConfig.DEFAULT_MAX_DIFFICULTY),
        format_func=lambda difficulty: DifficultyConfig.LABELS[difficulty],
        key="max_difficulty",
    )
    lift_names = {edge.id: edge.name for edge in graph.lifts()}
    avoid_lifts = st.multiselect(
        "Lifts to avoid",
        options=list(lift_names),
        format_func=lambda edge_id: lift_names[edge_id],
        key="avoid_lifts",
    )

    if not st.button("Find Route", key="find_route", type="primary"):
        return

    payload = {
        "ski_area_id": SKI_AREA_ID,
        "start_point_id": start_id,
        "end_point_id": end_id,
        "max_difficulty": max_difficulty,
        "avoid_lifts": avoid_lifts,
    }
    message = validate_route_payload(payload=payload, graph=graph)
    if message is not None:
        logger.info(f"Rejected route request: {message}")
        message.display()
        return

    result = RoutePlanner(graph=graph).plan(request=RouteRequest.from_dict(data=payload))
    if not result.found:
        NoRouteMessage().display()
    elif result.is_trivial:
        TrivialRouteMessage().display()
    else:
        render_route(result=result)


if __name__ == "__main__":
    main()
