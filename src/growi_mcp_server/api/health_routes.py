from fastapi import APIRouter

from ..config import settings
from ..mcp_server import SERVER_NAME, SERVER_VERSION
from ..tools.definitions import TOOL_DEFINITIONS

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Report liveness plus the wiki this process talks to."""
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "growi_api": settings.growi_api_base_url,
        "default_token_configured": settings.default_api_token() is not None,
        "tools": len(TOOL_DEFINITIONS),
    }
