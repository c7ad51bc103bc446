"""
Wiki Tool Layer

This module defines the caller-facing tools that wrap GrowiClient operations.

Responsibilities
----------------
- Invoke exactly one client operation per tool call.
- Render the resulting Outcome into a single human-readable text reply.
- Never raise for backend or transport failures; the client has already
  folded those into ``Failure``.
"""

from __future__ import annotations

from ..api.models import ToolReply
from ..core.outcome import Failure
from ..wiki.api_client import GrowiClient


# ---------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------

def render_failure(operation: str, failure: Failure) -> ToolReply:
    return ToolReply.text(f"{operation} failed: {failure.message or 'unknown error'}")


# ---------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------

async def tool_get_pages(client: GrowiClient, token: str) -> ToolReply:
    """
    List every page path, one per line under a header.
    """
    outcome = await client.list_pages(token)
    if isinstance(outcome, Failure):
        return render_failure("Page list retrieval", outcome)

    if not outcome.value:
        return ToolReply.text("No pages were found")

    return ToolReply.text("Retrieved page titles:\n\n" + "\n".join(outcome.value))


async def tool_get_page(client: GrowiClient, token: str, path: str) -> ToolReply:
    """
    Return the raw page body for ``path``, unwrapped.
    """
    outcome = await client.get_page_by_path(path, token)
    if isinstance(outcome, Failure):
        return render_failure("Page body retrieval", outcome)
    return ToolReply.text(outcome.value)


async def tool_get_page_by_id(client: GrowiClient, token: str, page_id: str) -> ToolReply:
    outcome = await client.get_page_by_id(page_id, token)
    if isinstance(outcome, Failure):
        return render_failure("Page body retrieval", outcome)
    return ToolReply.text(outcome.value)


async def tool_write_page(
    client: GrowiClient,
    token: str,
    path: str,
    body: str,
    *,
    verb: str,
) -> ToolReply:
    """
    Create or overwrite the page at ``path``.

    ``verb`` only selects the wording of the reply ("creation" or "edit");
    GROWI treats both as the same overwrite.
    """
    outcome = await client.create_or_replace_page(path, body, token)
    if isinstance(outcome, Failure):
        return render_failure(f"Page {verb}", outcome)

    past = "created" if verb == "creation" else "edited"
    return ToolReply.text(f"Page {past} successfully (ID: {outcome.value})")
