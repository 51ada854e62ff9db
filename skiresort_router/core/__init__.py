"""Core foundation classes for geodesic math and graph analysis.

- GeoCalculator: Distances, bearings, travel times
- GraphDiagnostics: Connectivity checks on a resort graph (import directly from graph_diagnostics module)
"""

from skiresort_router.core.geo_calculator import GeoCalculator

# GraphDiagnostics has circular import with model.coords
# Import directly: from skiresort_router.core.graph_diagnostics import GraphDiagnostics

__all__ = [
    "GeoCalculator",
]
