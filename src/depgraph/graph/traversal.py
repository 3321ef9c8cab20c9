"""Depth-bounded, direction-aware reachability over a dependency graph."""

from __future__ import annotations

from typing import Dict, List

from loguru import logger

from .models import Edge, Graph, NodeWithDepth, Subgraph

DIRECT_DEPTH = 1


def collect_depths(graph: Graph, root_id: str, max_depth: int, outgoing: bool) -> Dict[str, int]:
    """Minimum depth of every node reachable from ``root_id`` in one direction.

    ``outgoing=True`` follows edges from source to target (dependencies),
    ``outgoing=False`` follows them backwards (dependents). Nodes first seen
    at ``max_depth`` are recorded but not expanded.
    """
    depth_of: Dict[str, int] = {root_id: 0}
    frontier: List[str] = [root_id]

    for depth in range(max_depth):
        if not frontier:
            break
        current = set(frontier)
        next_frontier: List[str] = []
        next_depth = depth + 1

        for edge in graph.iter_edges():
            if outgoing:
                if edge.source not in current:
                    continue
                candidate = edge.target
            else:
                if edge.target not in current:
                    continue
                candidate = edge.source

            known = depth_of.get(candidate)
            if known is None or known > next_depth:
                depth_of[candidate] = next_depth
                next_frontier.append(candidate)

        frontier = next_frontier

    return depth_of


def _merge_depths(*depth_maps: Dict[str, int]) -> Dict[str, int]:
    merged: Dict[str, int] = {}
    for depth_map in depth_maps:
        for node_id, depth in depth_map.items():
            known = merged.get(node_id)
            if known is None or depth < known:
                merged[node_id] = depth
    return merged


def _is_indirect(edge: Edge, depths: Dict[str, int]) -> bool:
    return depths[edge.source] > DIRECT_DEPTH and depths[edge.target] > DIRECT_DEPTH


def traverse(graph: Graph, root_id: str, max_depth: int, include_indirect: bool) -> Subgraph:
    """Subgraph of dependencies and dependents around ``root_id``.

    Nodes carry the smallest depth at which either direction reached them.
    Every graph edge between two collected nodes is kept, except that with
    ``include_indirect=False`` edges between two nodes deeper than one hop
    are left out. An unknown ``root_id`` yields an empty subgraph.
    """
    if root_id not in graph:
        logger.debug(f"Traversal root not in graph: {root_id}")
        return Subgraph()

    depths = _merge_depths(
        collect_depths(graph, root_id, max_depth, outgoing=True),
        collect_depths(graph, root_id, max_depth, outgoing=False),
    )

    nodes = [
        NodeWithDepth(id=node_id, depth=depths[node_id], is_root=node_id == root_id)
        for node_id in graph.node_ids
        if node_id in depths
    ]

    edges = []
    for edge in graph.iter_edges():
        if edge.source not in depths or edge.target not in depths:
            continue
        if not include_indirect and _is_indirect(edge, depths):
            continue
        edges.append(edge)

    logger.debug(
        f"Traversal from {root_id} (depth={max_depth}, indirect={include_indirect}): "
        f"{len(nodes)} nodes, {len(edges)} edges"
    )
    return Subgraph(nodes=nodes, edges=edges)
