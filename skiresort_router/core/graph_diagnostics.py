"""Graph Diagnostics - Topology checks for a curated resort graph.

Helps whoever maintains resort data spot why a route cannot be found:
- Isolated nodes (no lift or segment touches them)
- Sink nodes (only incoming edges: you can arrive but never leave)
- Source nodes (only outgoing edges: reachable from nowhere)
- Dangling edges (an endpoint is missing from the node list)
- Weakly connected components (should be 1 for a single ski area)
- Directed reachability from a given node

Uses SciPy's sparse graph routines on an adjacency matrix built over every ID
the graph knows (nodes plus dangling edge endpoints).
"""

import logging
from typing import Any

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import breadth_first_order, connected_components

from skiresort_router.model.resort_graph import ResortGraph

logger = logging.getLogger(__name__)


class GraphDiagnostics:
    """Connectivity analysis of a ResortGraph.

    Example:
        diagnostics = GraphDiagnostics(graph=graph)
        if diagnostics.component_count() > 1:
            print("Resort graph is split:", diagnostics.summary())
    """

    def __init__(self, graph: ResortGraph) -> None:
        """Build the sparse adjacency matrix for the graph."""
        self.graph = graph

        known_ids = set(graph.nodes)
        for edge in graph.edges:
            known_ids.add(edge.start_point_id)
            known_ids.add(edge.end_point_id)

        self._ids: list[int] = sorted(known_ids)
        self._index: dict[int, int] = {node_id: i for i, node_id in enumerate(self._ids)}

        n = len(self._ids)
        rows = [self._index[edge.start_point_id] for edge in graph.edges]
        cols = [self._index[edge.end_point_id] for edge in graph.edges]
        self._matrix = csr_matrix(
            (np.ones(len(rows), dtype=np.float64), (rows, cols)),
            shape=(n, n),
        )
        self._out_degree = np.asarray(self._matrix.getnnz(axis=1)).ravel()
        self._in_degree = np.asarray(self._matrix.getnnz(axis=0)).ravel()

    def _degrees(self, node_id: int) -> tuple[int, int]:
        i = self._index[node_id]
        return int(self._in_degree[i]), int(self._out_degree[i])

    def isolated_nodes(self) -> list[int]:
        """Nodes with no incoming and no outgoing edges."""
        return [node_id for node_id in sorted(self.graph.nodes) if self._degrees(node_id=node_id) == (0, 0)]

    def sink_nodes(self) -> list[int]:
        """Nodes with incoming edges only."""
        result = []
        for node_id in sorted(self.graph.nodes):
            in_deg, out_deg = self._degrees(node_id=node_id)
            if in_deg > 0 and out_deg == 0:
                result.append(node_id)
        return result

    def source_nodes(self) -> list[int]:
        """Nodes with outgoing edges only."""
        result = []
        for node_id in sorted(self.graph.nodes):
            in_deg, out_deg = self._degrees(node_id=node_id)
            if in_deg == 0 and out_deg > 0:
                result.append(node_id)
        return result

    def component_count(self) -> int:
        """Number of weakly connected components (edge direction ignored)."""
        if not self._ids:
            return 0
        n_components, _ = connected_components(csgraph=self._matrix, directed=True, connection="weak")
        return int(n_components)

    def reachable_from(self, node_id: int) -> set[int]:
        """IDs reachable from a node along directed edges, including itself.

        Raises:
            KeyError: If the ID is unknown to the graph.
        """
        order = breadth_first_order(
            csgraph=self._matrix,
            i_start=self._index[node_id],
            directed=True,
            return_predecessors=False,
        )
        return {self._ids[int(i)] for i in order}

    def unreachable_points(self, node_id: int) -> list[int]:
        """Points of interest that cannot be reached from a node."""
        reachable = self.reachable_from(node_id=node_id)
        return [node.id for node in self.graph.points_of_interest() if node.id not in reachable]

    def summary(self) -> dict[str, Any]:
        """Collect all checks into a JSON-compatible dict."""
        return {
            "nodes": len(self.graph.nodes),
            "edges": len(self.graph.edges),
            "components": self.component_count(),
            "isolated_nodes": self.isolated_nodes(),
            "sink_nodes": self.sink_nodes(),
            "source_nodes": self.source_nodes(),
            "dangling_edges": [edge.id for edge in self.graph.dangling_edges()],
        }

    def log_summary(self) -> dict[str, Any]:
        """Compute the summary and log any problems found."""
        summary = self.summary()
        logger.info(
            f"Graph diagnostics: {summary['nodes']} nodes, {summary['edges']} edges, "
            f"{summary['components']} component(s)"
        )
        if summary["isolated_nodes"]:
            logger.warning(f"Isolated nodes: {summary['isolated_nodes']}")
        if summary["dangling_edges"]:
            logger.warning(f"Edges with unknown endpoints: {summary['dangling_edges']}")
        return summary
