"""
Tool Routes

HTTP rendition of the two tool-protocol operations: list the catalog and
call a tool. Replies use the same content shape as the MCP transport.
"""

from fastapi import APIRouter, Depends, Header, status
from typing import Any, Dict, List, Annotated, Optional

from .models import ToolCallRequest, ToolReply
from .dependencies import get_dispatcher
from ..tools.base import ToolDispatcher

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get(
    "",
    summary="List available tools",
    status_code=status.HTTP_200_OK,
)
def list_tools(
    dispatcher: Annotated[ToolDispatcher, Depends(get_dispatcher)],
) -> List[Dict[str, Any]]:
    return [tool.as_listing() for tool in dispatcher.list_tools()]


@router.post(
    "/call",
    response_model=ToolReply,
    summary="Call a tool",
    status_code=status.HTTP_200_OK,
)
async def call_tool(
    req: ToolCallRequest,
    dispatcher: Annotated[ToolDispatcher, Depends(get_dispatcher)],
    x_growi_api_token: Annotated[Optional[str], Header()] = None,
) -> ToolReply:
    """
    Execute a tool call.

    Backend and validation failures come back as a 200 text reply. An unknown
    tool name raises UnknownToolError, which the registered handler maps to
    a 404.

    Parameters
    ----------
    req : ToolCallRequest
        Tool name and arguments.

    x_growi_api_token : Optional[str]
        Call-scoped API token (``X-Growi-Api-Token`` header).
    """
    return await dispatcher.dispatch(
        req.name,
        req.arguments,
        api_token=x_growi_api_token,
    )
