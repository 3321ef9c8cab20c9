"""
Dependency analysis runner.

Launches dependency-cruiser against a repository checkout, extracts the
JSON document from its output, saves it next to the checkout and turns it
into a dependency graph. Runs for the same repository branch are
serialized and their results cached in memory.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from depgraph.config import settings
from depgraph.exceptions import AnalysisError, RepositoryNotFoundError
from depgraph.graph import Graph, build_graph

RepoKey = Tuple[str, str, str]

_JSON_START = re.compile(r'{\s*"modules":\s*\[')
_STDERR_LIMIT = 500


def extract_analysis_json(stdout: str) -> str:
    """Return the JSON document embedded in the CLI output.

    npx may print notices before the document; everything ahead of the
    first ``{"modules": [`` is discarded.
    """
    match = _JSON_START.search(stdout)
    if not match:
        raise AnalysisError(
            "Invalid output format from dependency analysis CLI.",
            details=stdout[:_STDERR_LIMIT],
        )
    return stdout[match.start():]


def parse_analysis_json(text: str) -> Dict[str, Any]:
    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse analysis JSON output: {e}")
        raise AnalysisError("Failed to parse dependency analysis output.", details=text[:1000]) from e
    if not isinstance(result, dict) or not isinstance(result.get("modules"), list):
        raise AnalysisError("Invalid dependency analysis output format.")
    return result


@dataclass
class AnalysisResult:
    """Outcome of one dependency analysis run."""

    key: RepoKey
    repo_root: Path
    raw: Dict[str, Any]
    graph: Graph
    output_file: Optional[Path] = None
    from_cache: bool = False


class DependencyAnalyzer:
    """Runs and caches dependency-cruiser analyses per repository branch."""

    def __init__(
        self,
        storage_root: Optional[str] = None,
        command: Optional[str] = None,
        timeout: Optional[int] = None,
        cache_enabled: Optional[bool] = None,
    ):
        self.storage_root = Path(storage_root or settings.storage_root)
        self.command = command or settings.analysis_command
        self.timeout = timeout if timeout is not None else settings.analysis_timeout
        self.cache_enabled = settings.analysis_cache_enabled if cache_enabled is None else cache_enabled
        self._cache: Dict[RepoKey, AnalysisResult] = {}
        self._locks: Dict[RepoKey, asyncio.Lock] = {}

    # ─── Storage layout ───────────────────────────────────

    def branch_dir(self, org: str, repo: str, branch: str) -> Path:
        """Resolved ``repos/<org>/<repo>/<branch>`` directory under the storage root.

        ``org`` and ``repo`` must be single path segments; ``branch`` may
        contain slashes but has to stay inside its repository directory.
        """
        for segment in (org, repo):
            if not segment or segment in (".", "..") or "/" in segment or "\\" in segment:
                raise self._not_found(f"{org}/{repo}@{branch}")

        repo_dir = (self.storage_root / "repos" / org / repo).resolve()
        path = (repo_dir / branch).resolve()
        if path == repo_dir or not path.is_relative_to(repo_dir):
            logger.warning(f"Rejected branch path outside of repository storage: {branch!r}")
            raise self._not_found(f"{org}/{repo}@{branch}")
        return path

    @staticmethod
    def _not_found(attempted: str) -> RepositoryNotFoundError:
        return RepositoryNotFoundError(
            "Repository directory not found on server.",
            details=f"Attempted path: {attempted}",
        )

    def repo_root(self, org: str, repo: str, branch: str) -> Path:
        return (self.branch_dir(org, repo, branch) / settings.code_dir_name).resolve()

    def output_file(self, org: str, repo: str, branch: str) -> Path:
        return (
            self.branch_dir(org, repo, branch)
            / settings.dependencies_dir_name
            / settings.analysis_output_file
        ).resolve()

    # ─── Public API ───────────────────────────────────────

    async def analyze(self, org: str, repo: str, branch: str, refresh: bool = False) -> AnalysisResult:
        """Analyse one repository branch, reusing a cached result unless ``refresh``."""
        key: RepoKey = (org, repo, branch)
        repo_root = self.repo_root(org, repo, branch)
        lock = self._locks.setdefault(key, asyncio.Lock())

        async with lock:
            cached = self._cache.get(key)
            if cached is not None and not refresh:
                logger.debug(f"Using cached dependency analysis for {org}/{repo}@{branch}")
                return replace(cached, from_cache=True)

            if not repo_root.is_dir():
                logger.error(f"Repository directory not found at resolved path: {repo_root}")
                raise self._not_found(str(repo_root))

            logger.info(f"Analyzing dependencies for: {repo_root}")
            stdout = await self._run_cli(repo_root)
            text = extract_analysis_json(stdout)
            output_file = await asyncio.to_thread(self._save_output, org, repo, branch, text)
            raw = parse_analysis_json(text)
            graph = build_graph(raw)

            result = AnalysisResult(
                key=key,
                repo_root=repo_root,
                raw=raw,
                graph=graph,
                output_file=output_file,
            )
            if self.cache_enabled:
                self._cache[key] = result
            logger.info(
                f"Dependency analysis complete for {org}/{repo}@{branch}: "
                f"{len(graph)} nodes, {len(graph.edges)} edges"
            )
            return result

    async def load_saved_analysis(self, org: str, repo: str, branch: str) -> Optional[Dict[str, Any]]:
        """Raw analysis previously saved for a branch, or None."""
        path = self.output_file(org, repo, branch)
        text = await asyncio.to_thread(self._read_output, path)
        if text is None:
            return None
        return parse_analysis_json(text)

    def invalidate(self, org: str, repo: str, branch: str) -> bool:
        key: RepoKey = (org, repo, branch)
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]
        return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        self._cache.clear()
        # locks still held belong to running analyses
        self._locks = {key: lock for key, lock in self._locks.items() if lock.locked()}

    # ─── Internals ────────────────────────────────────────

    def build_command(self, repo_root: Path) -> List[str]:
        return [
            self.command,
            "depcruise",
            "--include-only", ".",
            "--exclude", settings.analysis_exclude,
            "--output-type", "json",
            "--max-depth", "0",
            "--no-config",
            str(repo_root),
        ]

    async def _run_cli(self, repo_root: Path) -> str:
        cmd = self.build_command(repo_root)
        logger.info(f"Executing: {' '.join(cmd)}")
        env = {**os.environ, "NODE_OPTIONS": ""}

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(repo_root),
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to start depcruise process: {e}")
            raise AnalysisError(f"Failed to start dependency analysis process: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise AnalysisError(f"Dependency analysis timed out after {self.timeout} seconds") from e

        stderr_text = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            exit_code = process.returncode if process.returncode is not None else "unknown"
            logger.error(f"depcruise CLI exited with code {exit_code}")
            logger.error(f"stderr: {stderr_text}")
            raise AnalysisError(
                f"Dependency analysis failed (exit code {exit_code}): {stderr_text[:_STDERR_LIMIT]}",
                details=stderr_text[:_STDERR_LIMIT],
            )

        logger.info("depcruise CLI finished successfully.")
        return stdout.decode("utf-8", errors="replace")

    def _save_output(self, org: str, repo: str, branch: str, text: str) -> Optional[Path]:
        path = self.output_file(org, repo, branch)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            logger.info(f"Saved dependency analysis JSON to: {path}")
            return path
        except OSError as e:
            # the analysis itself succeeded; keep going without the saved copy
            logger.error(f"Failed to save dependency graph JSON to {path}: {e}")
            return None

    @staticmethod
    def _read_output(path: Path) -> Optional[str]:
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")


# Global instance
dependency_analyzer = DependencyAnalyzer()
