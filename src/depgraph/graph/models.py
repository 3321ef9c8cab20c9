"""Data structures for the file-level dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, Iterator, List, Optional, Set

EDGE_INTERNAL = "internal"
EDGE_CORE = "core"
EDGE_DEV_DEPENDENCY = "devDependency"
EDGE_UNRESOLVED = "unresolved"


def label_for(node_id: str) -> str:
    """Display label of a node: the basename of its path."""
    return PurePosixPath(node_id).name or node_id


@dataclass(frozen=True)
class Node:
    id: str

    @property
    def label(self) -> str:
        return label_for(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass(frozen=True)
class Edge:
    """Directed relation: ``source`` imports ``target``."""

    source: str
    target: str
    type: str = EDGE_INTERNAL

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "type": self.type}


class Graph:
    """Ordered node set plus edge list.

    Node order is first-seen order and serves as the tie-break for path
    matching. Edges may repeat. A graph is never mutated once a builder
    hands it out.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._edges: List[Edge] = []
        self.dropped_edges = 0

    def add_node(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            node = Node(node_id)
            self._nodes[node_id] = node
        return node

    def add_edge(self, source: str, target: str, edge_type: str = EDGE_INTERNAL) -> bool:
        """Append an edge; edges with an unregistered endpoint are dropped."""
        if source not in self._nodes or target not in self._nodes:
            self.dropped_edges += 1
            return False
        self._edges.append(Edge(source, target, edge_type))
        return True

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def node_ids(self) -> List[str]:
        return list(self._nodes)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "edges": [edge.to_dict() for edge in self._edges],
        }


@dataclass(frozen=True)
class NodeWithDepth:
    id: str
    depth: int
    is_root: bool = False

    @property
    def label(self) -> str:
        return label_for(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "depth": self.depth,
            "isRoot": self.is_root,
        }


@dataclass
class Subgraph:
    """Per-query result; built fresh for every call."""

    nodes: List[NodeWithDepth] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def node_ids(self) -> Set[str]:
        return {node.id for node in self.nodes}

    def depth_of(self, node_id: str) -> Optional[int]:
        for node in self.nodes:
            if node.id == node_id:
                return node.depth
        return None

    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class DirectRelations:
    dependencies: List[str] = field(default_factory=list)
    dependents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"dependencies": list(self.dependencies), "dependents": list(self.dependents)}
