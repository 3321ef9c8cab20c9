"""
Directory tree of a repository checkout, as shown next to the graph.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

SKIPPED_DIRECTORIES = {"node_modules"}


def _sort_key(item: Dict[str, Any]):
    return (item["type"] != "directory", item["name"].lower(), item["name"])


def get_directory_structure(dir_path: Path, root_path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Recursive listing of ``dir_path``.

    Hidden entries and ``node_modules`` are skipped. Each item is
    ``{"name", "type", "path"}`` with ``path`` relative to the root using
    ``/`` separators; directories carry ``children``. Directories sort
    before files, each group by name. Unreadable entries are logged and
    left out.
    """
    dir_path = Path(dir_path)
    root_path = Path(root_path) if root_path is not None else dir_path
    structure: List[Dict[str, Any]] = []

    try:
        entries = list(dir_path.iterdir())
    except OSError as e:
        logger.error(f"Could not read directory {dir_path}: {e}")
        return structure

    for entry in entries:
        if entry.name.startswith("."):
            continue
        relative_path = entry.relative_to(root_path).as_posix()
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            logger.warning(f"Could not get stats for {entry}: {e}")
            continue

        if is_dir:
            if entry.name in SKIPPED_DIRECTORIES:
                continue
            structure.append({
                "name": entry.name,
                "type": "directory",
                "path": relative_path,
                "children": get_directory_structure(entry, root_path),
            })
        else:
            structure.append({"name": entry.name, "type": "file", "path": relative_path})

    structure.sort(key=_sort_key)
    return structure

