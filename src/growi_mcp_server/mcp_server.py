"""
MCP stdio Server

Exposes the tool catalog and dispatcher over the Model Context Protocol on
stdin/stdout. This is the transport agent runtimes launch as a subprocess.

Run with: python -m growi_mcp_server
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import (
    METHOD_NOT_FOUND,
    CallToolRequest,
    ErrorData,
    TextContent,
    Tool,
)

from .config import Settings, settings
from .core.logging_config import setup_logging
from .prompts import SERVER_INSTRUCTIONS
from .tools.base import ToolDispatcher
from .tools.definitions import get_tool_definition
from .wiki.api_client import GrowiClient

logger = logging.getLogger("mcp.stdio")

SERVER_NAME = "mcp-growi"
SERVER_VERSION = "1.0.0"


class GrowiMcpServer:
    """Binds a ToolDispatcher to an MCP ``Server``."""

    def __init__(self, dispatcher: ToolDispatcher) -> None:
        self.dispatcher = dispatcher
        self.server = Server(
            SERVER_NAME,
            version=SERVER_VERSION,
            instructions=SERVER_INSTRUCTIONS,
        )
        self._register_handlers()

    @classmethod
    def from_settings(cls, config: Settings) -> "GrowiMcpServer":
        dispatcher = ToolDispatcher(
            GrowiClient.from_settings(config),
            default_api_token=config.default_api_token(),
        )
        return cls(dispatcher)

    def _call_scoped_token(self) -> Optional[str]:
        """Read ``apiToken`` from the current request's ``_meta``, if any."""
        try:
            meta = self.server.request_context.meta
        except LookupError:
            return None
        token = getattr(meta, "apiToken", None) if meta is not None else None
        return token if isinstance(token, str) and token else None

    async def list_tools(self) -> List[Tool]:
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in self.dispatcher.list_tools()
        ]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
        api_token: Optional[str] = None,
    ) -> List[TextContent]:
        # UnknownToolError propagates; over the wire reject_unknown_tool answers first.
        reply = await self.dispatcher.dispatch(name, arguments or {}, api_token=api_token)
        return [TextContent(type="text", text=item.text) for item in reply.content]

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            logger.debug("list_tools called")
            return await self.list_tools()

        # The dispatcher reports missing arguments itself.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            logger.info("call_tool: %s", name)
            return await self.call_tool(name, arguments, self._call_scoped_token())

        # The SDK folds handler exceptions into an isError result; an unknown
        # tool must reach the client as a JSON-RPC error instead.
        handle_call = self.server.request_handlers[CallToolRequest]

        async def reject_unknown_tool(req: CallToolRequest):
            if get_tool_definition(req.params.name) is None:
                logger.warning("Unknown tool requested: %s", req.params.name)
                raise McpError(
                    ErrorData(
                        code=METHOD_NOT_FOUND,
                        message=f"Unknown tool: {req.params.name}",
                    )
                )
            return await handle_call(req)

        self.server.request_handlers[CallToolRequest] = reject_unknown_tool

    async def run(self) -> None:
        logger.info("Starting %s (stdio transport)", SERVER_NAME)
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def main() -> None:
    setup_logging(settings.log_level)
    asyncio.run(GrowiMcpServer.from_settings(settings).run())


if __name__ == "__main__":
    main()
