"""
Web server entry point for Repo DepGraph.
"""

import uvicorn
from loguru import logger

from depgraph.config import settings
from depgraph.core.app import create_app
from depgraph.core.logging import setup_logging

# setup logging
setup_logging()

# create app
app = create_app()


def start_server():
    """start Web UI + REST API server"""
    logger.info("=" * 70)
    logger.info("STARTING DEPENDENCY GRAPH SERVICE")
    logger.info("=" * 70)
    logger.info(f"REST API: http://{settings.host}:{settings.port}/api/v1/")
    logger.info(f"Storage root: {settings.storage_root}")
    logger.info("=" * 70)

    uvicorn.run(
        "depgraph.server.web:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
        access_log=settings.debug
    )


def main():
    """Main entry point for web server"""
    start_server()


if __name__ == "__main__":
    main()
