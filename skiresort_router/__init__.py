"""Ski Resort Router - Fastest routes through a ski resort.

Given a resort's points of interest, lifts and trail segments, plus a
skier's constraints (hardest difficulty, lifts to skip), finds the quickest
way between two points and reduces it to a few readable steps.

Modules:
    core: Foundation classes (geo calculations, graph diagnostics)
    model: Data structures (Node, Edge, ResortGraph, RouteRequest, RouteStep, RouteResult)
    routing: Route engine (constraint filter, path search, path reducer, planner)
    ui: Request validators and the Streamlit route-finder page

Example:
    from skiresort_router.model import ResortGraph, RouteRequest
    from skiresort_router.routing import RoutePlanner
"""
