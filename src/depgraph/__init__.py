"""
Repo DepGraph - dependency graph service for analysed repositories.

Builds a file-level import graph from dependency-cruiser output and answers
bounded dependency / dependent queries around a file.
"""

from depgraph.__version__ import (
    __version__,
    __version_info__,
    get_version,
    get_version_info,
    get_features,
    FEATURES,
)

__all__ = [
    "__version__",
    "__version_info__",
    "get_version",
    "get_version_info",
    "get_features",
    "FEATURES",
]
