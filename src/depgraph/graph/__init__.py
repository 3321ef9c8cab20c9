"""Dependency graph core: construction, path resolution and traversal."""

from depgraph.graph.models import (
    DirectRelations,
    Edge,
    Graph,
    Node,
    NodeWithDepth,
    Subgraph,
)
from depgraph.graph.builder import build_graph, graph_from_dict, load_graph
from depgraph.graph.path_resolver import normalize_path, resolve_node_id
from depgraph.graph.traversal import collect_depths, traverse
from depgraph.graph.query import DependencyQueryService

__all__ = [
    "DirectRelations",
    "Edge",
    "Graph",
    "Node",
    "NodeWithDepth",
    "Subgraph",
    "build_graph",
    "graph_from_dict",
    "load_graph",
    "normalize_path",
    "resolve_node_id",
    "collect_depths",
    "traverse",
    "DependencyQueryService",
]
