"""
Map loosely specified file paths onto canonical graph node ids.

Paths coming from the UI may be absolute, may carry the checkout's
``main/`` or ``code/`` folder, or may be a bare file name. Resolution
tries progressively looser matches and returns the first hit in graph
order.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from .models import Graph

_DOUBLE_PREFIXES = ("main/code/", "code/main/")
_SINGLE_PREFIXES = ("main/", "code/")


def normalize_path(path: str) -> str:
    """Normalize a path for comparison against node ids."""
    cleaned = path.strip().lstrip("/")
    if "/" not in cleaned:
        return cleaned
    for prefix in _DOUBLE_PREFIXES:
        if cleaned.startswith(prefix):
            return cleaned[len(prefix):]
    for prefix in _SINGLE_PREFIXES:
        if cleaned.startswith(prefix):
            return cleaned[len(prefix):]
    return cleaned


def _bare_filename_suffix(query: str) -> Optional[str]:
    # "name.ext" -> "/name.ext"; the stem stops at the first dot
    if "/" in query or "." not in query:
        return None
    stem = query.split(".")[0]
    extension = query.rsplit(".", 1)[-1]
    return f"/{stem}.{extension}"


def _matchers(query: str) -> List[Callable[[str], bool]]:
    matchers: List[Callable[[str], bool]] = [
        lambda candidate: candidate == query,
        lambda candidate: candidate.endswith(f"/{query}"),
    ]
    if "/" in query:
        matchers.append(lambda candidate: query in candidate)
    suffix = _bare_filename_suffix(query)
    if suffix:
        matchers.append(lambda candidate: candidate.endswith(suffix))
    return matchers


def match_node_id(node_ids: Iterable[str], query: str) -> Optional[str]:
    """Return the first node id matching ``query``, or ``None``."""
    candidates = list(node_ids)
    if query in candidates:
        return query

    normalized_query = normalize_path(query)
    if not normalized_query:
        return None

    normalized = [(node_id, normalize_path(node_id)) for node_id in candidates]
    for matches in _matchers(normalized_query):
        for node_id, candidate in normalized:
            if matches(candidate):
                return node_id
    return None


def resolve_node_id(graph: Graph, query: str) -> Optional[str]:
    """Resolve ``query`` to a node id of ``graph``.

    Matching order, first hit wins with the graph's first-seen node order
    as tie-break:

    1. ``query`` is already a node id
    2. normalized id equals the normalized query
    3. normalized id ends with ``/<query>``
    4. the query contains ``/`` and the id contains the query
    5. the query is a bare ``name.ext`` and the id ends with ``/<stem>.<ext>``
    """
    return match_node_id(graph.node_ids, query)
