"""
FastAPI application configuration module
Responsible for creating and configuring FastAPI application instance
"""

from fastapi import FastAPI
from loguru import logger

from depgraph.config import settings, validate_analysis_command, validate_storage_root
from .exception_handlers import setup_exception_handlers
from .middleware import setup_middleware
from .routes import setup_routes


def create_app() -> FastAPI:
    """create FastAPI application instance"""

    app = FastAPI(
        title=settings.app_name,
        description="Dependency graph service: runs dependency-cruiser on cloned repositories and answers scoped dependency queries",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None
    )

    # set middleware
    setup_middleware(app)

    # set exception handler
    setup_exception_handlers(app)

    # set routes
    setup_routes(app)

    if not validate_storage_root():
        logger.warning("Dependency analysis will fail until repositories are cloned into the storage root")
    if not validate_analysis_command():
        logger.warning("Dependency analysis is unavailable without the analysis command")

    # root path
    @app.get("/")
    async def root():
        """root path interface"""
        return {
            "message": "Welcome to Repo DepGraph Service",
            "version": settings.app_version,
            "docs": "/docs" if settings.debug else "Documentation disabled in production",
            "health": "/api/v1/health"
        }

    return app
