"""
HTTP Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures exception handling, and provides a test-friendly application
factory.

Run with: uvicorn growi_mcp_server.main:app
"""

from __future__ import annotations

import logging
from fastapi import FastAPI

from .config import settings
from .core.errors import UnknownToolError, unknown_tool_handler, unhandled_exception_handler
from .core.logging_config import setup_logging

from .api import (
    health_routes,
    tool_routes,
)


logger = logging.getLogger("mcp.app")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    setup_logging(settings.log_level)

    app = FastAPI(
        title="growi-mcp-server",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # --------------------------------------------------------------
    # Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(UnknownToolError, unknown_tool_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(tool_routes.router)

    if settings.default_api_token() is None:
        logger.warning(
            "No process-wide GROWI API token configured; "
            "callers must supply X-Growi-Api-Token"
        )

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
