"""
Dependency query service.

Public query surface over one built graph. Every call takes the root
explicitly and returns a fresh result; the service keeps no per-session
state, so a single instance can serve concurrent requests.
"""

from __future__ import annotations

from typing import Optional

from .models import DirectRelations, Graph, Subgraph
from .path_resolver import resolve_node_id
from .traversal import traverse

ENTRY_POINT_MARKERS = ("page.", "index.", "main.", "app.")


class DependencyQueryService:
    """Bounded dependency / dependent queries over a :class:`Graph`."""

    def __init__(self, graph: Graph):
        self.graph = graph

    def resolve(self, path: str) -> Optional[str]:
        """Canonical node id for a loosely specified path, or None."""
        return resolve_node_id(self.graph, path)

    def compute_subgraph(self, root_id: str, max_depth: int, include_indirect: bool) -> Subgraph:
        return traverse(self.graph, root_id, max_depth, include_indirect)

    def list_direct_relations(self, root_id: str) -> DirectRelations:
        """Sorted immediate dependencies and dependents of ``root_id``."""
        subgraph = self.compute_subgraph(root_id, 1, True)
        dependencies = set()
        dependents = set()
        for edge in subgraph.edges:
            if edge.source == root_id:
                dependencies.add(edge.target)
            if edge.target == root_id:
                dependents.add(edge.source)
        return DirectRelations(
            dependencies=sorted(dependencies),
            dependents=sorted(dependents),
        )

    def default_root(self) -> Optional[str]:
        """Likely entry point of the repository, used as initial selection."""
        node_ids = self.graph.node_ids
        for node_id in node_ids:
            if any(marker in node_id for marker in ENTRY_POINT_MARKERS):
                return node_id
        return node_ids[0] if node_ids else None
