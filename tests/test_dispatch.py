import json

import httpx
import pytest

from growi_mcp_server.core.errors import UnknownToolError
from growi_mcp_server.tools.base import (
    MISSING_TOKEN_MESSAGE,
    TOOL_REGISTRY,
    ToolDispatcher,
)
from growi_mcp_server.tools.definitions import TOOL_DEFINITIONS, get_tool_definition

from conftest import TEST_TOKEN


def reply_text(reply) -> str:
    assert len(reply.content) == 1
    assert reply.content[0].type == "text"
    return reply.content[0].text


def test_catalog_names_are_stable():
    assert [tool.name for tool in TOOL_DEFINITIONS] == [
        "get_pages",
        "create_page",
        "edit_page",
        "get_page",
        "get_page_by_id",
    ]
    assert get_tool_definition("get_pages").required == ()
    assert get_tool_definition("create_page").required == ("path", "body")
    assert get_tool_definition("edit_page").required == ("path", "body")
    assert get_tool_definition("get_page").required == ("path",)
    assert get_tool_definition("get_page_by_id").required == ("id",)


def test_registry_matches_catalog():
    assert set(TOOL_REGISTRY) == {tool.name for tool in TOOL_DEFINITIONS}


def test_input_schema_shape():
    schema = get_tool_definition("create_page").input_schema()
    assert schema["type"] == "object"
    assert schema["required"] == ["path", "body"]
    assert schema["properties"]["path"]["type"] == "string"
    assert "required" not in get_tool_definition("get_pages").input_schema()


@pytest.mark.asyncio
async def test_get_pages_lists_paths_under_header(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(
        200, json={"pages": [{"path": "/a"}, {"path": "/b"}]}
    )
    text = reply_text(await dispatcher.dispatch("get_pages", {}))

    lines = text.splitlines()
    assert lines[0] == "Retrieved page titles:"
    assert [line for line in lines[1:] if line] == ["/a", "/b"]


@pytest.mark.asyncio
async def test_get_pages_empty(dispatcher):
    text = reply_text(await dispatcher.dispatch("get_pages", {}))
    assert text == "No pages were found"


@pytest.mark.asyncio
async def test_get_pages_failure(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(500)
    text = reply_text(await dispatcher.dispatch("get_pages", {}))
    assert text == "Page list retrieval failed: HTTP error! status: 500"


@pytest.mark.asyncio
async def test_create_page_confirms_with_id(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(200, json={"page": {"_id": "123"}})
    text = reply_text(
        await dispatcher.dispatch("create_page", {"path": "/x", "body": "hi"})
    )
    assert text == "Page created successfully (ID: 123)"


@pytest.mark.asyncio
async def test_edit_page_overwrites(dispatcher, fake_growi):
    page_id = fake_growi.add_page("/x", "old")
    text = reply_text(
        await dispatcher.dispatch("edit_page", {"path": "/x", "body": "new"})
    )

    assert text == f"Page edited successfully (ID: {page_id})"
    assert reply_text(await dispatcher.dispatch("get_page", {"path": "/x"})) == "new"


@pytest.mark.asyncio
async def test_write_failure_message(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(200, json={})
    text = reply_text(
        await dispatcher.dispatch("edit_page", {"path": "/x", "body": "new"})
    )
    assert text == "Page edit failed: Unknown error, body: {}"


@pytest.mark.asyncio
async def test_get_page_returns_raw_body(dispatcher, fake_growi):
    fake_growi.add_page("/a", "# Title\n\nbody")
    text = reply_text(await dispatcher.dispatch("get_page", {"path": "/a"}))
    assert text == "# Title\n\nbody"


@pytest.mark.asyncio
async def test_get_page_missing_is_a_reply_not_an_exception(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(200, json={"page": None})
    text = reply_text(await dispatcher.dispatch("get_page", {"path": "/missing"}))
    assert text == "Page body retrieval failed: Page does not exist"


@pytest.mark.asyncio
async def test_get_page_by_id(dispatcher, fake_growi):
    page_id = fake_growi.add_page("/a", "alpha")
    text = reply_text(await dispatcher.dispatch("get_page_by_id", {"id": page_id}))
    assert text == "alpha"


@pytest.mark.asyncio
async def test_non_string_id_is_passed_as_text(dispatcher, fake_growi):
    fake_growi.responder = lambda req: httpx.Response(
        200, json={"page": {"revision": {"body": "ok"}}}
    )
    await dispatcher.dispatch("get_page_by_id", {"id": 42})
    assert fake_growi.requests[0].url.params["pageId"] == "42"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool_name, args, missing",
    [
        ("create_page", {"path": "/x"}, "body"),
        ("create_page", {"body": "hi"}, "path"),
        ("create_page", {}, "path, body"),
        ("edit_page", {"path": "", "body": "hi"}, "path"),
        ("get_page", {"path": None}, "path"),
        ("get_page_by_id", {}, "id"),
    ],
)
async def test_missing_arguments_never_reach_backend(
    dispatcher, fake_growi, tool_name, args, missing
):
    text = reply_text(await dispatcher.dispatch(tool_name, args))

    first_line, echoed = text.split("\n", 1)
    assert first_line == f"Missing required argument(s): {missing}"
    assert json.loads(echoed.removeprefix("request.params: ")) == {
        "name": tool_name,
        "arguments": args,
    }
    assert fake_growi.calls == 0


@pytest.mark.asyncio
async def test_unknown_tool_raises_without_backend_call(dispatcher, fake_growi):
    with pytest.raises(UnknownToolError) as excinfo:
        await dispatcher.dispatch("delete_page", {"path": "/x"})

    assert excinfo.value.tool_name == "delete_page"
    assert fake_growi.calls == 0


@pytest.mark.asyncio
async def test_missing_token_short_circuits(growi_client, fake_growi):
    dispatcher = ToolDispatcher(growi_client, default_api_token=None)
    text = reply_text(await dispatcher.dispatch("get_pages", {}))

    assert text == MISSING_TOKEN_MESSAGE
    assert fake_growi.calls == 0


@pytest.mark.asyncio
async def test_call_scoped_token_overrides_default(growi_client, fake_growi):
    dispatcher = ToolDispatcher(growi_client, default_api_token="stale-token")
    fake_growi.add_page("/a", "alpha")

    text = reply_text(
        await dispatcher.dispatch("get_page", {"path": "/a"}, api_token=TEST_TOKEN)
    )

    assert text == "alpha"
    assert fake_growi.requests[0].headers["Authorization"] == f"Bearer {TEST_TOKEN}"


@pytest.mark.asyncio
async def test_call_scoped_token_without_default(growi_client, fake_growi):
    dispatcher = ToolDispatcher(growi_client)
    fake_growi.add_page("/a", "alpha")

    text = reply_text(await dispatcher.dispatch("get_pages", None, api_token=TEST_TOKEN))
    assert text.endswith("/a")


@pytest.mark.asyncio
async def test_non_ascii_token_is_a_failure_reply(growi_client, fake_growi):
    dispatcher = ToolDispatcher(growi_client, default_api_token="トークン")
    text = reply_text(await dispatcher.dispatch("get_pages", {}))

    assert text.startswith("Page list retrieval failed: ")
    assert fake_growi.calls == 0
