"""
Exception hierarchy for the dependency graph service.

All service errors inherit from DepGraphError so they can be caught
uniformly at the API layer. A lookup miss (unknown file or node id) is
not an error anywhere in the service; it yields empty results.
"""


class DepGraphError(Exception):
    """Base exception for all service errors."""


class InputError(DepGraphError, ValueError):
    """Raw analysis output is malformed (missing or non-list ``modules``)."""


class AnalysisError(DepGraphError):
    """Running or reading the static analysis failed."""

    def __init__(self, message: str, details: str = ""):
        self.details = details
        super().__init__(message)


class RepositoryNotFoundError(AnalysisError):
    """The repository checkout to analyse does not exist on disk."""
