"""
Tool Dispatch Layer

This module defines the central dispatch mechanism for every tool call,
whichever transport it arrived on. It enforces:

- Credential resolution (call-scoped token over the configured default)
- Explicit tool allow-listing against the catalog
- Required-argument validation driven by the catalog
- Uniform reply behavior: every outcome becomes a text reply, except an
  unknown tool name, which raises UnknownToolError

No tool is callable unless it is both defined in tools/definitions.py and
registered here.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Callable, Awaitable, List, Optional

from .definitions import (
    TOOL_DEFINITIONS,
    TOOL_CREATE_PAGE,
    TOOL_EDIT_PAGE,
    TOOL_GET_PAGE,
    TOOL_GET_PAGE_BY_ID,
    TOOL_GET_PAGES,
    get_tool_definition,
)
from .wiki_tools import (
    tool_get_page,
    tool_get_page_by_id,
    tool_get_pages,
    tool_write_page,
)
from ..api.models import ToolDescriptor, ToolReply
from ..core.errors import UnknownToolError
from ..wiki.api_client import GrowiClient

logger = logging.getLogger("mcp.tools")

MISSING_TOKEN_MESSAGE = (
    "The API token is not configured. Enter an API token in the MCP server "
    "settings, or set apiToken in the environment."
)


# ---------------------------------------------------------------------
# Tool Type Definitions
# ---------------------------------------------------------------------

ToolHandler = Callable[
    [Dict[str, Any], GrowiClient, str],
    Awaitable[ToolReply],
]


# ---------------------------------------------------------------------
# Tool Registry (AUTHORITATIVE)
# ---------------------------------------------------------------------

def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


async def _handle_get_pages(
    args: Dict[str, Any],
    client: GrowiClient,
    token: str,
) -> ToolReply:
    return await tool_get_pages(client, token)


async def _handle_create_page(
    args: Dict[str, Any],
    client: GrowiClient,
    token: str,
) -> ToolReply:
    return await tool_write_page(
        client, token, _text(args["path"]), _text(args["body"]), verb="creation"
    )


async def _handle_edit_page(
    args: Dict[str, Any],
    client: GrowiClient,
    token: str,
) -> ToolReply:
    return await tool_write_page(
        client, token, _text(args["path"]), _text(args["body"]), verb="edit"
    )


async def _handle_get_page(
    args: Dict[str, Any],
    client: GrowiClient,
    token: str,
) -> ToolReply:
    return await tool_get_page(client, token, _text(args["path"]))


async def _handle_get_page_by_id(
    args: Dict[str, Any],
    client: GrowiClient,
    token: str,
) -> ToolReply:
    return await tool_get_page_by_id(client, token, _text(args["id"]))


TOOL_REGISTRY: Dict[str, ToolHandler] = {
    TOOL_GET_PAGES: _handle_get_pages,
    TOOL_CREATE_PAGE: _handle_create_page,
    TOOL_EDIT_PAGE: _handle_edit_page,
    TOOL_GET_PAGE: _handle_get_page,
    TOOL_GET_PAGE_BY_ID: _handle_get_page_by_id,
}


def _verify_registry() -> None:
    advertised = {tool.name for tool in TOOL_DEFINITIONS}
    handled = set(TOOL_REGISTRY)
    if advertised != handled:
        raise RuntimeError(
            "Tool catalog and dispatch registry disagree: "
            f"advertised-only={sorted(advertised - handled)}, "
            f"handled-only={sorted(handled - advertised)}"
        )


_verify_registry()


# ---------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------

def missing_arguments(tool: ToolDescriptor, args: Dict[str, Any]) -> List[str]:
    """
    Return the required fields of ``tool`` that are absent, None, or empty
    strings in ``args``. Types and content are not checked.
    """
    return [
        field for field in tool.required
        if args.get(field) is None or args.get(field) == ""
    ]


# ---------------------------------------------------------------------
# Public Dispatch API
# ---------------------------------------------------------------------

class ToolDispatcher:
    """
    Dispatch tool calls to GrowiClient operations.

    Parameters
    ----------
    client : GrowiClient
        Backend client used for every call.

    default_api_token : Optional[str]
        Process-wide credential, used when a call supplies none.
    """

    def __init__(
        self,
        client: GrowiClient,
        default_api_token: Optional[str] = None,
    ) -> None:
        self.client = client
        self.default_api_token = default_api_token

    def list_tools(self) -> List[ToolDescriptor]:
        return list(TOOL_DEFINITIONS)

    async def dispatch(
        self,
        tool_name: str,
        args: Optional[Dict[str, Any]] = None,
        api_token: Optional[str] = None,
    ) -> ToolReply:
        """
        Dispatch a single tool call.

        Parameters
        ----------
        tool_name : str
            The tool name requested by the caller.

        args : Optional[Dict[str, Any]]
            Tool arguments.

        api_token : Optional[str]
            Call-scoped credential; overrides the default when set.

        Returns
        -------
        ToolReply
            A text reply describing success or failure.

        Raises
        ------
        UnknownToolError
            If the tool name is not in the catalog.
        """
        args = args or {}

        token = api_token or self.default_api_token
        if not token:
            logger.warning("Tool call %s rejected: no API token configured", tool_name)
            return ToolReply.text(MISSING_TOKEN_MESSAGE)

        tool = get_tool_definition(tool_name)
        handler = TOOL_REGISTRY.get(tool_name)
        if tool is None or handler is None:
            raise UnknownToolError(tool_name)

        missing = missing_arguments(tool, args)
        if missing:
            request_params = json.dumps(
                {"name": tool_name, "arguments": args},
                ensure_ascii=False,
                default=str,
            )
            return ToolReply.text(
                f"Missing required argument(s): {', '.join(missing)}\n"
                f"request.params: {request_params}"
            )

        logger.info("Dispatching tool call: %s", tool_name)
        return await handler(args, self.client, token)
