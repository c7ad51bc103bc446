"""
Tool Definitions

This module defines the authoritative tool catalog exposed to callers. The
names here are a compatibility surface and must not change.

The dispatch registry in tools/base.py is checked against this table at
import time; a tool cannot be advertised without a handler, or handled
without being advertised.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Final

from ..api.models import ToolDescriptor, ToolParameter


# ---------------------------------------------------------------------
# Tool Name Constants (Single Source of Truth)
# ---------------------------------------------------------------------

TOOL_GET_PAGES: Final[str] = "get_pages"
TOOL_CREATE_PAGE: Final[str] = "create_page"
TOOL_EDIT_PAGE: Final[str] = "edit_page"
TOOL_GET_PAGE: Final[str] = "get_page"
TOOL_GET_PAGE_BY_ID: Final[str] = "get_page_by_id"


# ---------------------------------------------------------------------
# Tool Definitions
# ---------------------------------------------------------------------

TOOL_DEFINITIONS: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=TOOL_GET_PAGES,
        description="Lists the paths of all pages in GROWI.",
    ),
    ToolDescriptor(
        name=TOOL_CREATE_PAGE,
        description="Creates a new GROWI page with the given path and body.",
        properties={
            "path": ToolParameter(description="Path of the page to create."),
            "body": ToolParameter(description="Page body (markdown)."),
        },
        required=("path", "body"),
    ),
    ToolDescriptor(
        name=TOOL_EDIT_PAGE,
        description=(
            "Edits the GROWI page at the given path. "
            "The existing body is overwritten."
        ),
        properties={
            "path": ToolParameter(description="Path of the page to edit."),
            "body": ToolParameter(description="New page body (markdown)."),
        },
        required=("path", "body"),
    ),
    ToolDescriptor(
        name=TOOL_GET_PAGE,
        description="Fetches the body of the GROWI page at the given path.",
        properties={
            "path": ToolParameter(
                description="Path of the page to fetch (e.g. /foo/bar)."
            ),
        },
        required=("path",),
    ),
    ToolDescriptor(
        name=TOOL_GET_PAGE_BY_ID,
        description="Fetches the body of the GROWI page with the given ID.",
        properties={
            "id": ToolParameter(description="ID of the page to fetch."),
        },
        required=("id",),
    ),
)

_BY_NAME: Dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOL_DEFINITIONS}


def get_tool_definition(name: str) -> Optional[ToolDescriptor]:
    return _BY_NAME.get(name)
