"""
Configuration module for Repo DepGraph.

This module exports all configuration-related objects and functions.
"""

from depgraph.config.settings import Settings, settings
from depgraph.config.validation import validate_analysis_command, validate_storage_root

__all__ = [
    # Settings
    "Settings",
    "settings",
    # Validation functions
    "validate_analysis_command",
    "validate_storage_root",
]
