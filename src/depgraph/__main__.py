"""
Main entry point for the depgraph package.

Usage:
    python -m depgraph [--web|--version]
    python -m depgraph query GRAPH_JSON FILE [--depth N] [--indirect] [--relations]
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger


def run_query(args) -> int:
    """Answer a dependency query against a saved analysis file."""
    from depgraph.exceptions import InputError
    from depgraph.graph import DependencyQueryService, load_graph

    path = Path(args.graph)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read graph file {path}: {e}")
        return 1

    try:
        graph = load_graph(data)
    except InputError as e:
        logger.error(f"Invalid graph file {path}: {e}")
        return 1

    service = DependencyQueryService(graph)
    root = service.resolve(args.file)
    if root is None:
        # unknown ids give empty results below
        logger.warning(f"No graph node matches file: {args.file}")
    target = root or args.file

    if args.relations:
        payload = {"root": root, **service.list_direct_relations(target).to_dict()}
    else:
        payload = {"root": root, **service.compute_subgraph(target, args.depth, args.indirect).to_dict()}

    print(json.dumps(payload, indent=2))
    return 0


def main(argv=None):
    """Main entry point for the package."""
    parser = argparse.ArgumentParser(
        description="Repo DepGraph - dependency graph service for analysed repositories"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Start web server (FastAPI)",
    )

    subparsers = parser.add_subparsers(dest="command")
    query = subparsers.add_parser("query", help="Query a saved dependency analysis")
    query.add_argument("graph", help="dependency-graph.json or full graph JSON")
    query.add_argument("file", help="File path to center the query on")
    query.add_argument("--depth", type=int, default=1, help="Traversal depth (default: 1)")
    query.add_argument(
        "--indirect",
        action="store_true",
        help="Include edges between indirect relations",
    )
    query.add_argument(
        "--relations",
        action="store_true",
        help="Only list direct dependencies and dependents",
    )

    args = parser.parse_args(argv)

    if args.version:
        from depgraph import __version__
        print(f"depgraph version {__version__}")
        return 0

    if args.command == "query":
        return run_query(args)

    # Default: start web server
    print("Starting web server...")
    from depgraph.server.web import main as web_main
    return web_main()


if __name__ == "__main__":
    sys.exit(main())
