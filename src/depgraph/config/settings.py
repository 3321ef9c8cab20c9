"""
Configuration settings for Repo DepGraph.

This module defines all application settings using Pydantic Settings.
Settings can be configured via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional


class Settings(BaseSettings):
    # Application Settings
    app_name: str = "Repo DepGraph Service"
    app_version: str = "0.3.0"
    debug: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Host for the web service", alias="HOST")
    port: int = Field(default=8090, description="Port for the web service", alias="PORT")

    # Repository storage layout: <storage_root>/repos/<org>/<repo>/<branch>/{code,dependencies}
    storage_root: str = Field(default="storage", description="Root directory of cloned repositories", alias="STORAGE_ROOT")
    code_dir_name: str = Field(default="code", description="Checkout directory name inside a branch folder")
    dependencies_dir_name: str = Field(default="dependencies", description="Analysis output directory name inside a branch folder")
    analysis_output_file: str = Field(default="dependency-graph.json", description="File name of the saved raw analysis")

    # Static analysis CLI
    analysis_command: str = Field(default="npx", description="Executable used to launch dependency-cruiser", alias="ANALYSIS_COMMAND")
    analysis_exclude: str = Field(default=r"node_modules|\.git|dist|build", description="Exclude pattern passed to depcruise")
    analysis_timeout: int = Field(default=300, description="Analysis timeout in seconds", alias="ANALYSIS_TIMEOUT")
    analysis_cache_enabled: bool = Field(default=True, description="Keep analysis results in memory per repository branch")

    # Traversal Settings
    default_depth: int = Field(default=1, description="Default traversal depth for subgraph queries")
    max_depth: int = Field(default=5, description="Maximum traversal depth accepted by the API")

    # API Settings
    cors_origins: List[str] = Field(default=["*"], description="CORS allowed origins")

    # logging
    log_file: Optional[str] = Field(default=None, description="Log file path", alias="LOG_FILE")
    log_level: str = Field(default="INFO", description="Log level", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields to avoid validation errors
        populate_by_name = True


# Global settings instance
settings = Settings()
