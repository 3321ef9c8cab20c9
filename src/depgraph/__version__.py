"""Version information for the dependency graph service."""

__version__ = "0.3.0"
__version_info__ = tuple(int(i) for i in __version__.split("."))

# Feature flags based on version
FEATURES = {
    "dependency_graph": True,      # Available since 0.1.0
    "path_resolution": True,       # Available since 0.1.0
    "file_tree": True,             # Available since 0.2.0
    "stateless_queries": True,     # Available since 0.3.0
}


def get_version() -> str:
    """Get the current version string."""
    return __version__


def get_version_info() -> tuple:
    """Get the version as a tuple of integers."""
    return __version_info__


def get_features() -> dict:
    """Get available features for this version."""
    return FEATURES.copy()
