"""
Pytest configuration and fixtures for depgraph tests
"""
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Ensure the `src/` directory is available for imports.
# pytest executes from the repository root, but our package lives in `src/`.
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from depgraph.graph import build_graph
from depgraph.services import DependencyAnalyzer


def modules_for_chain(*names):
    """Raw analysis output for a linear chain names[0] -> names[1] -> ..."""
    modules = []
    for source, target in zip(names, names[1:]):
        modules.append({"source": source, "dependencies": [{"resolved": target}]})
    modules.append({"source": names[-1]})
    return {"modules": modules}


@pytest.fixture
def sample_modules():
    """dependency-cruiser style output of a small TypeScript project"""
    return {
        "modules": [
            {
                "source": "src/app.ts",
                "dependencies": [
                    {"resolved": "src/utils/format.ts", "dependencyTypes": ["local"]},
                    {"resolved": "fs", "coreModule": True, "dependencyTypes": []},
                    {"resolved": None, "couldNotResolve": True},
                ],
            },
            {
                "source": "src/utils/format.ts",
                "dependencies": [{"resolved": "src/utils/strings.ts"}],
            },
            {"source": "src/utils/strings.ts", "dependencies": []},
            {
                "source": "src/components/page.tsx",
                "dependencies": [{"resolved": "src/app.ts", "dependencyTypes": ["local"]}],
            },
        ]
    }


@pytest.fixture
def sample_graph(sample_modules):
    return build_graph(sample_modules)


@pytest.fixture
def chain_graph():
    """a -> b -> c -> d"""
    return build_graph(modules_for_chain("a", "b", "c", "d"))


@pytest.fixture
def repo_storage(tmp_path):
    """Storage root with one cloned repository branch (acme/web@main)"""
    code_dir = tmp_path / "repos" / "acme" / "web" / "main" / "code"
    (code_dir / "src" / "utils").mkdir(parents=True)
    (code_dir / "src" / "app.ts").write_text("import { format } from './utils/format';\n")
    (code_dir / "src" / "utils" / "format.ts").write_text("export const format = () => '';\n")
    (code_dir / "package.json").write_text("{}\n")
    (code_dir / ".git").mkdir()
    (code_dir / "node_modules" / "left-pad").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def analyzer(repo_storage, sample_modules):
    """Analyzer whose CLI run is replaced by canned depcruise output"""
    service = DependencyAnalyzer(storage_root=str(repo_storage), cache_enabled=True)
    service._run_cli = AsyncMock(
        return_value="npx: installed 1 in 2.1s\n" + json.dumps(sample_modules)
    )
    return service


# Test configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires node and depcruise)"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
