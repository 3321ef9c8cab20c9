"""
Logging configuration module
"""

import logging
import sys

from loguru import logger

from depgraph.config import settings


def setup_logging():
    """configure logging system"""
    # remove default log handler
    logger.remove()

    # uvicorn / asyncio chatter
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # add console log handler
    logger.add(
        sys.stderr,
        level="DEBUG" if settings.debug else settings.log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    # add file log handler (if needed)
    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 day",
            retention="30 days",
            compression="zip"
        )
