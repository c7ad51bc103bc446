import json
from typing import Callable, Dict, Optional, Tuple

import httpx
import pytest

from growi_mcp_server.tools.base import ToolDispatcher
from growi_mcp_server.wiki.api_client import GrowiClient

BASE_URL = "https://growi.test/_api/v3"
TEST_TOKEN = "test-token"


class FakeGrowi:
    """
    In-memory stand-in for the GROWI page API.

    ``responder`` short-circuits routing so a test can return any response
    (or raise any transport error) it needs.
    """

    def __init__(self) -> None:
        self.pages: Dict[str, Tuple[str, str]] = {}
        self.requests = []
        self.responder: Optional[Callable[[httpx.Request], httpx.Response]] = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    def add_page(self, path: str, body: str) -> str:
        page_id = f"id{len(self.pages) + 1}"
        self.pages[path] = (page_id, body)
        return page_id

    def _find_by_id(self, page_id: str):
        for path, (pid, body) in self.pages.items():
            if pid == page_id:
                return path, body
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)

        if request.headers.get("Authorization") != f"Bearer {TEST_TOKEN}":
            return httpx.Response(403, json={"error": "forbidden"})

        route = request.url.path.removeprefix("/_api/v3")

        if request.method == "GET" and route == "/pages/list":
            return httpx.Response(
                200, json={"pages": [{"path": path} for path in self.pages]}
            )

        if request.method == "GET" and route == "/page":
            params = request.url.params
            if "path" in params:
                found = self.pages.get(params["path"])
                body = found[1] if found else None
            else:
                match = self._find_by_id(params.get("pageId", ""))
                body = match[1] if match else None
            if body is None:
                return httpx.Response(200, json={"page": None})
            return httpx.Response(200, json={"page": {"revision": {"body": body}}})

        if request.method == "POST" and route == "/page":
            payload = json.loads(request.content)
            existing = self.pages.get(payload["path"])
            page_id = existing[0] if existing else f"id{len(self.pages) + 1}"
            self.pages[payload["path"]] = (page_id, payload["body"])
            return httpx.Response(201, json={"page": {"_id": page_id}})

        return httpx.Response(404, text="not found")


@pytest.fixture
def fake_growi():
    return FakeGrowi()


@pytest.fixture
def growi_client(fake_growi):
    return GrowiClient(
        BASE_URL,
        timeout=5.0,
        transport=httpx.MockTransport(fake_growi.handle),
    )


@pytest.fixture
def dispatcher(growi_client):
    return ToolDispatcher(growi_client, default_api_token=TEST_TOKEN)
