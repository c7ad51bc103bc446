from functools import lru_cache

from ..config import settings
from ..tools.base import ToolDispatcher
from ..wiki.api_client import GrowiClient


@lru_cache
def get_growi_client() -> GrowiClient:
    return GrowiClient.from_settings(settings)


def get_dispatcher() -> ToolDispatcher:
    return ToolDispatcher(
        get_growi_client(),
        default_api_token=settings.default_api_token(),
    )
