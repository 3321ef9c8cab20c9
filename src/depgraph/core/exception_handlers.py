"""
Exception handler module
"""

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger

from depgraph.config import settings
from depgraph.exceptions import AnalysisError, InputError, RepositoryNotFoundError


def setup_exception_handlers(app: FastAPI) -> None:
    """set exception handler"""

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """global exception handler"""
        logger.error(f"Global exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.debug else "An unexpected error occurred"
            }
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        """HTTP exception handler"""
        logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP error",
                "message": exc.detail
            }
        )

    @app.exception_handler(InputError)
    async def input_error_handler(request, exc):
        """malformed analysis or graph data"""
        logger.warning(f"Invalid graph input: {exc}")
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid dependency data",
                "details": str(exc)
            }
        )

    @app.exception_handler(RepositoryNotFoundError)
    async def repository_not_found_handler(request, exc):
        """repository checkout missing"""
        logger.warning(f"Repository not found: {exc.details}")
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "details": exc.details
            }
        )

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(request, exc):
        """dependency analysis failure"""
        logger.error(f"Analysis process failed: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to run analysis",
                "details": str(exc)
            }
        )
