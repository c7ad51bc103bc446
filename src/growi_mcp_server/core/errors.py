"""
Global Error Handling

This module defines the exception taxonomy shared by both transports and the
FastAPI exception handlers for the HTTP surface.

Only one condition is ever raised out of the tool layer: a request for a
tool that is not in the catalog. Every other failure (missing credential,
missing argument, transport or backend error) is rendered as a text reply.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("mcp.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class UnknownToolError(ValueError):
    """Raised when a caller requests a tool the catalog does not define."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def unknown_tool_handler(
    request: Request,
    exc: UnknownToolError,
) -> JSONResponse:
    """
    Map a catalog mismatch to a 404 so HTTP callers can tell it apart from
    a tool that ran and reported failure.
    """
    logger.warning("Unknown tool requested: %s", exc.tool_name)
    return JSONResponse(
        status_code=404,
        content={"error": "unknown_tool", "detail": str(exc)},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Turn a fault outside the tool contract into a 500.

    Backend problems never get here; they are already text replies. What
    remains is a defect in this process, so the trace is logged and the
    caller only learns which route failed.
    """
    logger.exception(
        "Tool server fault on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "tool_server_fault",
            "detail": f"{request.url.path} failed; see server log",
        },
    )
