"""Services around the graph core: running the analysis and listing files."""

from depgraph.services.analysis import (
    AnalysisResult,
    DependencyAnalyzer,
    dependency_analyzer,
    extract_analysis_json,
    parse_analysis_json,
)
from depgraph.services.file_tree import get_directory_structure

__all__ = [
    "AnalysisResult",
    "DependencyAnalyzer",
    "dependency_analyzer",
    "extract_analysis_json",
    "parse_analysis_json",
    "get_directory_structure",
]
