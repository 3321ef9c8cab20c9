"""
Validation functions for configuration settings.

This module checks that the external pieces the service relies on
(the analysis CLI launcher and the repository storage root) are usable.
"""

import shutil
from pathlib import Path

from loguru import logger

from depgraph.config.settings import settings


def validate_analysis_command() -> bool:
    """Validate that the analysis launcher is on PATH"""
    if shutil.which(settings.analysis_command) is None:
        logger.warning(f"Analysis command not found on PATH: {settings.analysis_command}")
        return False
    return True


def validate_storage_root() -> bool:
    """Validate that the repository storage root exists"""
    root = Path(settings.storage_root)
    if not root.is_dir():
        logger.warning(f"Storage root does not exist: {root.resolve()}")
        return False
    return True
