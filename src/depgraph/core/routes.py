"""
Route configuration module
"""

from fastapi import FastAPI

from depgraph.api.routes import router


def setup_routes(app: FastAPI) -> None:
    """set application routes"""

    app.include_router(router, prefix="/api/v1", tags=["Dependencies"])
