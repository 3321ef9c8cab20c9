"""Construct the canonical dependency graph from dependency-cruiser output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List

from loguru import logger

from depgraph.exceptions import InputError
from .models import (
    EDGE_CORE,
    EDGE_INTERNAL,
    EDGE_UNRESOLVED,
    Graph,
)


def edge_type_for(dependency: Mapping) -> str:
    """Pick the edge type of a dependency record.

    Priority: first analyzer-supplied dependency type, then core module,
    then unresolvable, otherwise internal.
    """
    dependency_types = dependency.get("dependencyTypes") or []
    if dependency_types:
        return str(dependency_types[0])
    if dependency.get("coreModule"):
        return EDGE_CORE
    if dependency.get("couldNotResolve"):
        return EDGE_UNRESOLVED
    return EDGE_INTERNAL


def _modules_of(raw: Any) -> List[Mapping]:
    if not isinstance(raw, Mapping):
        raise InputError(
            f"Analysis output must be an object with a 'modules' array, got {type(raw).__name__}"
        )
    modules = raw.get("modules")
    if modules is None:
        raise InputError("Analysis output is missing the 'modules' array")
    if not isinstance(modules, list):
        raise InputError(
            f"Analysis output 'modules' must be an array, got {type(modules).__name__}"
        )
    return modules


def build_graph(raw: Any) -> Graph:
    """Build a :class:`Graph` from a raw ``{"modules": [...]}`` document.

    Every module source becomes a node (first occurrence fixes its order).
    Each dependency whose ``resolved`` path is set adds a node for that path
    and an edge ``source -> resolved``. Dependencies that could not be
    resolved to a path add nothing.

    Raises:
        InputError: If ``modules`` is missing or not a list.
    """
    modules = _modules_of(raw)

    graph = Graph()
    skipped = 0
    for module in modules:
        if not isinstance(module, Mapping) or not module.get("source"):
            skipped += 1
            continue
        source = str(module["source"])
        graph.add_node(source)

        for dependency in module.get("dependencies") or []:
            if not isinstance(dependency, Mapping):
                continue
            target = dependency.get("resolved")
            if target is None:
                continue
            target = str(target)
            graph.add_node(target)
            graph.add_edge(source, target, edge_type_for(dependency))

    if skipped:
        logger.debug("Skipped {} module records without a source path.", skipped)
    logger.info(
        "Dependency graph built: nodes={}, edges={}.",
        len(graph),
        len(graph.edges),
    )
    logger.debug("Edge types: {}", summarize_edge_types(graph))
    return graph


def graph_from_dict(data: Mapping) -> Graph:
    """Rebuild a graph from its ``{"nodes": [...], "edges": [...]}`` form.

    Edges referencing a node id that is not listed in ``nodes`` are dropped;
    the count is kept on ``graph.dropped_edges`` and logged.
    """
    if not isinstance(data, Mapping) or not isinstance(data.get("nodes"), list):
        raise InputError("Graph data must be an object with a 'nodes' array")

    graph = Graph()
    for node in data["nodes"]:
        node_id = node.get("id") if isinstance(node, Mapping) else node
        if node_id:
            graph.add_node(str(node_id))

    for edge in data.get("edges") or []:
        if not isinstance(edge, Mapping):
            graph.dropped_edges += 1
            continue
        graph.add_edge(
            str(edge.get("source")),
            str(edge.get("target")),
            str(edge.get("type") or EDGE_INTERNAL),
        )

    if graph.dropped_edges:
        logger.warning(
            "Dropped {} edges referencing unknown nodes while loading graph data.",
            graph.dropped_edges,
        )
    return graph


def load_graph(data: Any) -> Graph:
    """Build a graph from either raw analysis output or full graph data."""
    if isinstance(data, Mapping) and "modules" not in data and "nodes" in data:
        return graph_from_dict(data)
    return build_graph(data)


def summarize_edge_types(graph: Graph) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for edge in graph.iter_edges():
        counts[edge.type] = counts.get(edge.type, 0) + 1
    return counts
